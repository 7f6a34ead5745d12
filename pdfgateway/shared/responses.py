"""PDF response framing."""

from pathlib import PurePath

from fastapi import Response


def sanitize_filename(filename: str | None, default: str = "document") -> str:
    """
    Reduce a caller-supplied name to a safe `<stem>.pdf`.

    Directory parts are dropped and every character outside [A-Za-z0-9-_] in
    the stem becomes "-".
    """
    stem = PurePath((filename or "").replace("\\", "/")).name
    if stem.lower().endswith(".pdf"):
        stem = stem[:-4]
    safe_stem = "".join(char if char.isascii() and (char.isalnum() or char in "-_") else "-" for char in stem)
    safe_stem = safe_stem.strip("-_") or default
    return f"{safe_stem}.pdf"


def pdf_response(pdf_bytes: bytes, filename: str) -> Response:
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f'attachment; filename="{filename}"',
            "Content-Length": str(len(pdf_bytes)),
        },
    )
