from dataclasses import dataclass
from typing import Iterable, Optional

from fastapi import HTTPException, UploadFile, status


@dataclass
class IncomingFile:
    content: bytes
    filename: str
    extension: str


def file_extension(filename: Optional[str]) -> str:
    if not filename or "." not in filename:
        return ""
    return filename.rsplit(".", 1)[-1].lower()


async def read_upload(file: UploadFile, *, allowed_extensions: Iterable[str], max_bytes: int) -> IncomingFile:
    """Read an uploaded file into memory, rejecting bad extensions and oversized bodies with 400."""
    allowed = set(allowed_extensions)
    extension = file_extension(file.filename)
    if extension not in allowed:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid file type. Allowed types: {', '.join(sorted(allowed))}."
        )

    content = await file.read()
    if not content:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Uploaded file is empty.")
    if len(content) > max_bytes:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"File too large. Maximum file size is {max_bytes // (1024 * 1024)}MB."
        )
    return IncomingFile(content=content, filename=file.filename, extension=extension)


async def read_optional_upload(file: Optional[UploadFile], **kwargs) -> Optional[IncomingFile]:
    # Browsers send an empty part with no filename when the input is left blank
    if file is None or not file.filename:
        return None
    return await read_upload(file, **kwargs)
