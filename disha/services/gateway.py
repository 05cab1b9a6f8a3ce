import os
import time
import yaml

from typing import AsyncIterator, List, Optional, Sequence

from langchain_core.messages import AIMessage, HumanMessage
from langchain_core.prompts import ChatPromptTemplate, MessagesPlaceholder
from langchain_google_genai import ChatGoogleGenerativeAI
from pydantic import ValidationError

from disha.core.config import settings, logger
from disha.schemas import CourseRecommendation, Message, Question, ResumeAnalysis, RoadmapStep
from disha.services import response_schemas
from disha.utils import parsers
from disha.utils.parsers import ParseError

class GatewayError(RuntimeError):
    """The model could not be reached (missing key, network, quota, auth)."""

def load_prompts(prompt_path: str = settings.PROMPTS_PATH) -> dict:
    """Loads prompts from disha/prompts.yaml"""
    if not os.path.exists(prompt_path):
        logger.warning(f"⚠️ prompts.yaml not found at {prompt_path}")
        return {}

    try:
        with open(prompt_path, "r", encoding="utf-8") as f:
            prompts = yaml.safe_load(f) or {}
        logger.info("✅ Prompts loaded from YAML.")
        return prompts
    except Exception as e:
        logger.error(f"❌ Failed to load prompts.yaml: {e}")
        return {}

def mask_key(key: str) -> str:
    if not key or len(key) < 5:
        return "❌ NOT SET"
    return f"✅ ...{key[-4:]}"  # Shows only last 4 chars

def init_ai_model(cfg=settings) -> Optional[ChatGoogleGenerativeAI]:
    """Builds the Gemini client, or returns None when no key is configured."""
    if not cfg.GOOGLE_API_KEY:
        logger.critical("❌ GOOGLE_API_KEY is not set. Every AI feature will return its fallback.")
        return None

    try:
        llm = ChatGoogleGenerativeAI(
            model=cfg.GEMINI_MODEL,
            temperature=cfg.MODEL_TEMPERATURE,
            google_api_key=cfg.GOOGLE_API_KEY,
        )
        logger.info(f"✅ Gemini Initialized successfully. Google API: {mask_key(cfg.GOOGLE_API_KEY)}")
        return llm
    except Exception as e:
        logger.error(f"Gemini Fail: {e}")
        return None

def _preview(text: str, words: int = 50) -> str:
    return " ".join(str(text).replace("\n", " ").split()[:words])

def _chunk_text(chunk) -> str:
    content = chunk.content
    if isinstance(content, str):
        return content
    # Gemini may hand back a list of content parts
    return "".join(
        part.get("text", "") if isinstance(part, dict) else str(part)
        for part in content
    )

def to_chat_history(history: Sequence[Message]) -> list:
    """Maps transcript messages onto LangChain messages (user -> human, model -> ai)."""
    mapped = []
    for msg in history:
        # Gemini rejects empty turns (e.g. a placeholder that never got text)
        if not msg.text:
            continue
        if msg.role == "user":
            mapped.append(HumanMessage(content=msg.text))
        else:
            mapped.append(AIMessage(content=msg.text))
    return mapped

class ModelGateway:
    """
    The single integration point with the model.

    Knows every prompt and response shape. Schema-bound calls return parsed,
    validated models; malformed output becomes an empty result (or None for
    the resume). Transport problems surface as GatewayError.
    """

    def __init__(self, llm=None, prompts: Optional[dict] = None,
                 resume_char_limit: int = settings.RESUME_CHAR_LIMIT,
                 course_count: int = settings.COURSE_COUNT):
        self.llm = llm
        self.prompts = load_prompts() if prompts is None else prompts
        self.resume_char_limit = resume_char_limit
        self.course_count = course_count

    @classmethod
    def from_settings(cls, cfg=settings) -> "ModelGateway":
        return cls(llm=init_ai_model(cfg))

    @property
    def is_configured(self) -> bool:
        return self.llm is not None

    def _require_llm(self):
        if self.llm is None:
            raise GatewayError("Model gateway is not configured (missing GOOGLE_API_KEY).")
        return self.llm

    def get_prompt(self, prompt_name: str) -> ChatPromptTemplate:
        """Retrieves a prompt template from the loaded YAML."""
        raw_text = self.prompts.get(prompt_name, "")
        if not raw_text:
            logger.error(f"Prompt '{prompt_name}' not found!")
            raise GatewayError(f"Prompt '{prompt_name}' is missing.")
        return ChatPromptTemplate.from_template(raw_text)

    async def _execute_and_log(self, chain, inputs: dict, step_name: str) -> str:
        logger.info(f"📤 [{step_name}] SENDING: {_preview(inputs)}...")
        start_time = time.time()

        try:
            response = await chain.ainvoke(inputs)
        except Exception as e:
            logger.warning(f"⚠️ [{step_name}] Model call failed: {e}")
            raise GatewayError(f"{step_name} failed: {e}") from e

        duration = time.time() - start_time
        content = _chunk_text(response)
        if content:
            logger.info(f"📥 [{step_name}] RECEIVED ({duration:.2f}s): {_preview(content)}...")
        else:
            logger.info(f"📥 [{step_name}] RECEIVED ({duration:.2f}s): [Empty Content]")

        usage = getattr(response, "usage_metadata", None)
        if usage:
            logger.info(
                f"💰 TOKEN USAGE ({step_name}): "
                f"In={usage.get('input_tokens', 0)}, Out={usage.get('output_tokens', 0)}, "
                f"Total={usage.get('total_tokens', 0)}"
            )

        return content

    async def _generate_json(self, prompt_name: str, inputs: dict, schema: dict, step_name: str):
        llm = self._require_llm().bind(
            response_mime_type="application/json",
            response_schema=schema,
        )
        chain = self.get_prompt(prompt_name) | llm
        text = await self._execute_and_log(chain, inputs, step_name)
        expect = list if schema["type"] == "array" else dict
        return parsers.parse_json_response(text, expect=expect)

    def _validate_items(self, items: list, model, step_name: str) -> list:
        valid = []
        for idx, item in enumerate(items):
            try:
                valid.append(model.model_validate(item))
            except ValidationError as e:
                logger.warning(f"⚠️ [{step_name}] Dropping item {idx}: {e.error_count()} validation error(s)")
        return valid

    async def _generate_list(self, prompt_name: str, inputs: dict, schema: dict, model, step_name: str) -> list:
        try:
            items = await self._generate_json(prompt_name, inputs, schema, step_name)
        except ParseError as e:
            logger.error(f"❌ [{step_name}] Unusable response: {e}")
            return []
        return self._validate_items(items, model, step_name)

    # --- CHAT ---

    async def stream_chat(self, history: Sequence[Message], message: str) -> AsyncIterator[str]:
        """Yields text fragments of the mentor's reply, in arrival order."""
        llm = self._require_llm()
        prompt = ChatPromptTemplate.from_messages([
            ("system", self.prompts.get("chat_system_prompt", "")),
            MessagesPlaceholder("history"),
            ("human", "{message}"),
        ])
        chain = prompt | llm
        inputs = {"history": to_chat_history(history), "message": message}

        logger.info(f"📤 [Career Chat] SENDING: {_preview(message)}... (history={len(inputs['history'])})")
        start_time = time.time()
        fragments = 0

        try:
            async for chunk in chain.astream(inputs):
                text = _chunk_text(chunk)
                if text:
                    fragments += 1
                    yield text
        except Exception as e:
            logger.warning(f"⚠️ [Career Chat] Stream failed after {fragments} fragment(s): {e}")
            raise GatewayError(f"Career Chat failed: {e}") from e

        logger.info(f"📥 [Career Chat] STREAM DONE ({time.time() - start_time:.2f}s): {fragments} fragment(s)")

    # --- SCHEMA-BOUND CALLS ---

    async def generate_roadmap(self, role: str, background: str) -> List[RoadmapStep]:
        return await self._generate_list(
            "roadmap_prompt",
            {"role": role, "background": background},
            response_schemas.ROADMAP_SCHEMA,
            RoadmapStep,
            "Roadmap Generator",
        )

    async def generate_interview_questions(self, topic: str, level: str,
                                           count: int = settings.INTERVIEW_QUESTION_COUNT) -> List[Question]:
        # The count is requested, not enforced: callers get whatever came back.
        questions = await self._generate_list(
            "interview_prompt",
            {"topic": topic, "level": level, "count": count},
            response_schemas.QUESTIONS_SCHEMA,
            Question,
            "Mock Interview",
        )

        # Answers are keyed by id, so a repeated id would share one selection
        unique, seen_ids = [], set()
        for q in questions:
            if q.id in seen_ids:
                logger.warning(f"⚠️ [Mock Interview] Dropping question with duplicate id {q.id}")
                continue
            seen_ids.add(q.id)
            unique.append(q)
        return unique

    async def recommend_courses(self, goal: str, gap: str = "") -> List[CourseRecommendation]:
        return await self._generate_list(
            "courses_prompt",
            {"goal": goal, "gap": gap.strip() or "No specific weak area", "count": self.course_count},
            response_schemas.COURSES_SCHEMA,
            CourseRecommendation,
            "Course Recommender",
        )

    async def analyze_resume(self, text: str, role: str) -> Optional[ResumeAnalysis]:
        step_name = "Resume Analyzer"
        try:
            data = await self._generate_json(
                "resume_prompt",
                {"role": role, "resume_text": text[:self.resume_char_limit]},
                response_schemas.RESUME_SCHEMA,
                step_name,
            )
            return ResumeAnalysis.model_validate(data)
        except (ParseError, ValidationError) as e:
            logger.error(f"❌ [{step_name}] Unusable response: {e}")
            return None
