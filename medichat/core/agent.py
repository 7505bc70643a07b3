"""
Agent Module - Medical Q&A

Answers free-text medical questions with an OpenAI-compatible chat model
(Groq by default) through LangChain. The dialogue engine only sees a plain
string: on any failure the caller gets a fixed apology instead of an error.
"""

import logging

from langchain_openai import ChatOpenAI
from langchain_core.prompts import ChatPromptTemplate

from medichat.core.config import LLM_API_KEY, LLM_BASE_URL, LLM_MODEL, LLM_MAX_TOKENS
from medichat.core.prompts.medical import MEDICAL_SYSTEM_PROMPT, MEDICAL_APOLOGY

logger = logging.getLogger(__name__)


def build_medical_llm() -> ChatOpenAI:
    return ChatOpenAI(
        model=LLM_MODEL,
        temperature=0,
        max_tokens=LLM_MAX_TOKENS,
        openai_api_key=LLM_API_KEY,
        openai_api_base=LLM_BASE_URL,
    )


async def answer_medical_question(question: str) -> str:
    """
    Get a short, general answer to a medical question.

    Args:
        question: The user's free-text question

    Returns:
        The model's answer (about 10 lines), or MEDICAL_APOLOGY on failure
    """
    prompt = ChatPromptTemplate.from_messages([
        ("system", MEDICAL_SYSTEM_PROMPT),
        ("human", "{question}"),
    ])

    try:
        chain = prompt | build_medical_llm()
        raw_result = await chain.ainvoke({"question": question})
        answer = (raw_result.content or "").strip()
        if not answer:
            logger.warning("Empty answer from medical model")
            return MEDICAL_APOLOGY
        logger.info(f"Medical model answered ({len(answer)} chars)")
        return answer
    except Exception as e:
        logger.error(f"ERROR in agent.py: medical model call failed. Error: {e}")
        return MEDICAL_APOLOGY
