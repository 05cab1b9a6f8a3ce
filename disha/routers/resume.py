import logging

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from disha.core.config import settings
from disha.db.session_store import Workspace
from disha.routers.deps import ensure_idle, get_workspace, require_fields
from disha.schemas import ResumeRequest
from disha.utils import parsers

router = APIRouter(prefix="/resume", tags=["resume"])
logger = logging.getLogger(__name__)

@router.get("")
def get_analysis(workspace: Workspace = Depends(get_workspace)):
    return workspace.resume.render()

@router.post("/analysis")
async def analyze_resume(request: ResumeRequest, workspace: Workspace = Depends(get_workspace)):
    """Scores the resume text against the target role."""
    require_fields(resume_text=request.resume_text, target_role=request.target_role)
    ensure_idle(workspace.resume)

    logger.info(f"📄 Resume analysis for role: {request.target_role} ({len(request.resume_text)} chars)")
    await workspace.resume.analyze(request.resume_text, request.target_role)
    return workspace.resume.render()

@router.post("/upload")
async def upload_resume(file: UploadFile = File(...)):
    """
    Extracts text from a PDF resume so the browser can fill the text box.
    """
    logger.info(f"📂 Received file upload: {file.filename}")

    # MIME type is only a quick filter; the magic bytes below are the real check
    if file.content_type != "application/pdf":
        raise HTTPException(status_code=400, detail="Invalid file type. Only PDF allowed.")

    content = await file.read()

    if len(content) > settings.MAX_UPLOAD_SIZE:
        raise HTTPException(status_code=413, detail="File too large. Max size is 5MB.")

    # PDF files start with %PDF (bytes: 25 50 44 46)
    if not content.startswith(b"%PDF"):
        logger.warning(f"⚠️ Security Block: Magic Bytes mismatch for {file.filename}")
        raise HTTPException(status_code=400, detail="Invalid file format. Not a valid PDF.")

    text = parsers.extract_text_from_pdf(content)

    # Almost no text usually means a scanned image
    if len(text.strip()) < 50:
        logger.warning(f"⚠️ OCR Required: File {file.filename} contains almost no text.")
        return {
            "filename": file.filename,
            "status": "partial_success",
            "warning": "File appears to be a scanned image. OCR may be required.",
            "extracted_text": "",
        }

    logger.info(f"✅ Text extraction successful. Length: {len(text)} chars")
    return {
        "filename": file.filename,
        "status": "success",
        "extracted_text": text[:settings.RESUME_CHAR_LIMIT],
    }
