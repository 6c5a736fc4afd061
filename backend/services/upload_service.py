# backend/services/upload_service.py
import logging
import random
import re
import shutil
import time
from pathlib import Path
from typing import Optional

from fastapi import UploadFile
from starlette.concurrency import run_in_threadpool

logger = logging.getLogger("backend.uploads")

_SAFE_SUFFIX = re.compile(r"^\.[A-Za-z0-9]{1,10}$")


def generate_filename(original_name: Optional[str]) -> str:
    """
    Build a storage name from the current time and a random number.
    Only a plain extension of the client's filename is kept.
    """
    suffix = Path(original_name or "").suffix
    ext = suffix.lower() if _SAFE_SUFFIX.match(suffix) else ""
    unique = f"{int(time.time() * 1000)}-{random.randint(0, 10**9)}"
    return unique + ext


def has_file(upload: Optional[UploadFile]) -> bool:
    return upload is not None and bool(upload.filename)


def _write(upload: UploadFile, target: Path) -> None:
    with target.open("wb") as buffer:
        shutil.copyfileobj(upload.file, buffer)


async def save_upload(upload: UploadFile, upload_dir: Path) -> str:
    """Store an uploaded file under a generated name and return that name."""
    upload_dir.mkdir(parents=True, exist_ok=True)
    filename = generate_filename(upload.filename)
    target = upload_dir / filename
    # regenerate on the rare name collision instead of overwriting
    while target.exists():
        filename = generate_filename(upload.filename)
        target = upload_dir / filename
    await run_in_threadpool(_write, upload, target)
    logger.info(f"Stored upload as {filename}")
    return filename


def remove_upload(filename: str, upload_dir: Path) -> None:
    path = upload_dir / filename
    try:
        path.unlink()
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning(f"Could not remove upload {filename}: {e}")
