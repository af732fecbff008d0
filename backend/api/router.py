from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, UploadFile
from fastapi.responses import PlainTextResponse, Response
from slowapi import Limiter
from slowapi.util import get_remote_address

from api.dependencies import get_session_store
from config import settings
from models.requests import (
    ComprehensiveResultsRequest,
    FeedbackRequest,
    InterviewEndRequest,
    InterviewStartRequest,
    InterviewTurnRequest,
    QuestionSetRequest,
    ResumeAnalyzeRequest,
    SpeakRequest,
    VoiceTurnRequest,
)
from models.responses import (
    ComprehensiveResultsResponse,
    FeedbackResponse,
    InterviewEndResponse,
    InterviewMetadata,
    InterviewTurnResponse,
    ModelMeta,
    QuestionSetResponse,
    ResumeAnalysisResponse,
)
from services import (
    gemini_client,
    interview_service,
    pdf_parser,
    report_service,
    resume_analyzer,
    speech_client,
)
from services.interview_catalog import all_categories
from services.monitoring import monitor
from services.resume_analyzer import is_degraded
from services.session_store import SessionNotFoundError, SessionStore

router = APIRouter()
limiter = Limiter(key_func=get_remote_address)


def _require_text(value: str, field: str) -> str:
    if not value.strip():
        raise HTTPException(status_code=400, detail=f"{field} is required")
    return value.strip()


def _session_not_found(session_id: str) -> HTTPException:
    return HTTPException(status_code=404, detail=f"Interview session not found: {session_id}")


@router.get("/health")
async def health():
    return {
        "status": "ok",
        "gemini_configured": bool(settings.gemini_api_key),
        "cache_enabled": settings.cache_enabled,
        "interview_categories": len(all_categories()),
    }


# --- Resume ---


@router.post("/resume/analyze", response_model=ResumeAnalysisResponse)
@limiter.limit("10/minute")
async def analyze_resume(request: Request, body: ResumeAnalyzeRequest):
    resume_text = _require_text(body.resume_text, "Resume text")
    analysis, response = await resume_analyzer.analyze(resume_text, body.category, body.user_id)
    return ResumeAnalysisResponse(
        analysis=analysis,
        degraded=is_degraded(analysis, response),
        meta=ModelMeta.from_response(response),
    )


@router.post("/resume/upload", response_model=ResumeAnalysisResponse)
@limiter.limit("10/minute")
async def upload_resume(
    request: Request,
    resume_file: UploadFile = File(...),
    category: str = Form("general"),
    user_id: str | None = Form(None),
):
    # Validate file type
    if not resume_file.filename or not resume_file.filename.lower().endswith(".pdf"):
        raise HTTPException(status_code=400, detail="Only PDF files are accepted")

    # Read and validate size
    content = await resume_file.read()
    max_bytes = settings.max_upload_size_mb * 1024 * 1024
    if len(content) > max_bytes:
        raise HTTPException(
            status_code=400,
            detail=f"File too large. Max size: {settings.max_upload_size_mb}MB",
        )

    try:
        resume_text, document = pdf_parser.extract_document(content, resume_file.filename)
    except Exception:
        raise HTTPException(status_code=400, detail="Could not parse PDF file")

    if not resume_text.strip():
        raise HTTPException(status_code=400, detail="No text could be extracted from PDF")

    analysis, response = await resume_analyzer.analyze(resume_text, category, user_id)
    return ResumeAnalysisResponse(
        analysis=analysis,
        document=document,
        degraded=is_degraded(analysis, response),
        meta=ModelMeta.from_response(response),
    )


# --- Interview ---


@router.post("/questions", response_model=QuestionSetResponse)
@limiter.limit("20/minute")
async def generate_questions(request: Request, body: QuestionSetRequest):
    role = _require_text(body.role, "Role")
    if not any(s.strip() for s in body.tech_stack):
        raise HTTPException(status_code=400, detail="Tech stack is required")
    questions, response = await interview_service.generate_questions(
        role, body.level, [s.strip() for s in body.tech_stack if s.strip()], body.count, body.user_id
    )
    return QuestionSetResponse(
        questions=questions,
        degraded=is_degraded(questions, response),
        meta=ModelMeta.from_response(response),
    )


@router.post("/interview/start", response_model=InterviewTurnResponse)
@limiter.limit("20/minute")
async def start_interview(
    request: Request,
    body: InterviewStartRequest,
    store: SessionStore = Depends(get_session_store),
):
    _require_text(body.context.role, "Role")
    resume_summary = None
    if body.resume_analysis is not None:
        resume_summary = resume_analyzer.summarize(body.resume_analysis).model_dump(by_alias=True)
    session, greeting, response = await interview_service.start_interview(
        store, body.context, resume_summary, body.user_id
    )
    return InterviewTurnResponse(
        session_id=session.session_id,
        reply=greeting,
        turn=len(session.conversation),
        degraded=not response.success,
        meta=ModelMeta.from_response(response),
    )


@router.post("/interview/respond", response_model=InterviewTurnResponse)
@limiter.limit("60/minute")
async def respond(
    request: Request,
    body: InterviewTurnRequest,
    store: SessionStore = Depends(get_session_store),
):
    message = _require_text(body.message, "Message")
    try:
        reply, response = await interview_service.respond(store, body.session_id, message)
    except SessionNotFoundError:
        raise _session_not_found(body.session_id)
    return InterviewTurnResponse(
        session_id=body.session_id,
        reply=reply,
        turn=len(store.get(body.session_id).conversation),
        degraded=not response.success,
        meta=ModelMeta.from_response(response),
    )


@router.post("/interview/voice", response_model=InterviewTurnResponse)
@limiter.limit("60/minute")
async def voice_respond(
    request: Request,
    body: VoiceTurnRequest,
    store: SessionStore = Depends(get_session_store),
):
    spoken_text = _require_text(body.transcript, "Transcript")
    try:
        reply, response = await interview_service.voice_respond(store, body.session_id, spoken_text)
    except SessionNotFoundError:
        raise _session_not_found(body.session_id)
    return InterviewTurnResponse(
        session_id=body.session_id,
        reply=reply,
        turn=len(store.get(body.session_id).conversation),
        degraded=not response.success,
        meta=ModelMeta.from_response(response),
    )


@router.post("/interview/end", response_model=InterviewEndResponse)
@limiter.limit("20/minute")
async def end_interview(
    request: Request,
    body: InterviewEndRequest,
    store: SessionStore = Depends(get_session_store),
):
    try:
        session, feedback, response = await interview_service.end_interview(store, body.session_id)
    except SessionNotFoundError:
        raise _session_not_found(body.session_id)
    return InterviewEndResponse(
        session_id=session.session_id,
        transcript=session.conversation,
        feedback=feedback,
        degraded=is_degraded(feedback, response),
        meta=ModelMeta.from_response(response),
    )


@router.post("/feedback", response_model=FeedbackResponse)
@limiter.limit("20/minute")
async def feedback(request: Request, body: FeedbackRequest):
    transcript = _require_text(body.transcript, "Transcript")
    result, response = await interview_service.final_feedback(body.context, transcript, body.user_id)
    return FeedbackResponse(
        feedback=result,
        degraded=is_degraded(result, response),
        meta=ModelMeta.from_response(response),
    )


@router.post("/results/comprehensive", response_model=ComprehensiveResultsResponse)
@limiter.limit("10/minute")
async def comprehensive_results(request: Request, body: ComprehensiveResultsRequest):
    transcript = _require_text(body.interview_transcript, "Interview transcript")
    report, response = await report_service.comprehensive_report(
        body.resume_analysis, transcript, body.interview_context, body.user_id
    )
    ctx = body.interview_context
    return ComprehensiveResultsResponse(
        results=report,
        resume_analysis=resume_analyzer.summarize(body.resume_analysis),
        interview_metadata=InterviewMetadata(
            role=ctx.role, level=ctx.level, tech_stack=ctx.tech_stack, session_id=body.session_id
        ),
        degraded=is_degraded(report, response),
        meta=ModelMeta.from_response(response),
    )


# --- Speech ---


@router.post("/tts/speak")
@limiter.limit("30/minute")
async def speak(request: Request, body: SpeakRequest):
    try:
        audio = await speech_client.synthesize(body.text, body.voice, body.format)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except speech_client.SpeechSynthesisError as e:
        raise HTTPException(status_code=502, detail=str(e))
    media_type = "audio/wav" if body.format == "wav" else f"audio/L16;rate={speech_client.SAMPLE_RATE}"
    return Response(content=audio, media_type=media_type)


@router.get("/tts/voices")
async def voices():
    return {"voices": speech_client.list_voices(), "default": settings.tts_default_voice}


# --- Model monitoring ---


@router.get("/models/health")
async def models_health(detailed: bool = False):
    summary = monitor.health()
    summary["cacheSize"] = gemini_client.cache_size()
    if detailed:
        summary.update(monitor.detailed())
    return summary


@router.get("/models/report", response_class=PlainTextResponse)
async def models_report():
    return monitor.report()


@router.post("/models/cache/clear")
async def clear_cache():
    cleared = gemini_client.cache_size()
    gemini_client.clear_cache()
    return {"cleared": cleared}
