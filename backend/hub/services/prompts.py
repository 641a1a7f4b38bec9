# backend/hub/services/prompts.py
"""
Prompt templates, one builder per AI feature.

Every builder is a pure function from the validated request body to the full
chat message list (system message first). Caller text is interpolated as-is:
no escaping and no length cap.
"""
from __future__ import annotations

from typing import Dict, List

from hub.schemas import (
    AtsOptimizerRequest,
    HabitInsightsRequest,
    JobAssistantRequest,
    KnowledgeQueryRequest,
    SupportChatRequest,
)

Messages = List[Dict[str, str]]


def _text(value) -> str:
    return "" if value is None else str(value)


def _pair(system: str, user: str) -> Messages:
    return [
        {"role": "system", "content": system},
        {"role": "user", "content": user},
    ]


# ----------------------------
# Support chat
# ----------------------------

def support_system_prompt(body: SupportChatRequest) -> str:
    kb_context = ""
    if body.knowledgeBase:
        lines = "\n".join(f"- {_text(kb.title)}: {_text(kb.content)}" for kb in body.knowledgeBase)
        kb_context = f"\nKnowledge Base:\n{lines}"

    return (
        "You are a helpful, professional customer support agent. Your goal is to:\n"
        "1. Answer questions accurately using the provided knowledge base\n"
        "2. Be friendly and empathetic\n"
        "3. Escalate to a human when you cannot help\n"
        "4. Create tickets for complex issues\n"
        "\n"
        f"{kb_context}\n"
        "\n"
        "If you cannot answer from the knowledge base, politely say so and offer to escalate.\n"
        "\n"
        "Respond in JSON format:\n"
        "{\n"
        '  "reply": "Your response to the customer",\n'
        '  "shouldEscalate": false,\n'
        '  "suggestedTicketPriority": "low" | "medium" | "high" | null,\n'
        '  "sentiment": "positive" | "neutral" | "negative"\n'
        "}"
    )


def build_support_messages(body: SupportChatRequest) -> Messages:
    history = [{"role": _text(m.role) or "user", "content": _text(m.content)} for m in (body.conversationHistory or [])]
    return [
        {"role": "system", "content": support_system_prompt(body)},
        *history,
        {"role": "user", "content": body.message},
    ]


# ----------------------------
# Habit insights
# ----------------------------

HABIT_SYSTEM_PROMPT = (
    "You are a supportive habit tracking coach. Analyze the user's habit data and provide "
    "personalized, actionable insights.\n"
    "\n"
    "Be encouraging but honest. Identify patterns, suggest improvements, and celebrate wins.\n"
    "\n"
    "Provide 2-4 specific insights in JSON format:\n"
    "{\n"
    '  "insights": [\n'
    "    {\n"
    '      "type": "pattern" | "suggestion" | "encouragement",\n'
    '      "message": "Your insight here"\n'
    "    }\n"
    "  ],\n"
    '  "overallScore": 0-100,\n'
    '  "topPerformingHabit": "habit name or null",\n'
    '  "needsAttention": "habit name or null"\n'
    "}"
)


def _log_line(log) -> str:
    status = "✓ Completed" if log.completed else "✗ Missed"
    notes = f' - "{log.notes}"' if log.notes else ""
    return f"{_text(log.habit_name)} on {_text(log.logged_at)}: {status}{notes}"


def habit_system_prompt(body: HabitInsightsRequest) -> str:
    # habits and recent logs live in the system message
    habits_info = "\n".join(f"- {_text(h.name)} ({_text(h.frequency)})" for h in body.habits)
    logs_info = "\n".join(_log_line(l) for l in body.logs)
    return (
        f"{HABIT_SYSTEM_PROMPT}\n"
        "\n"
        "Habits being tracked:\n"
        f"{habits_info}\n"
        "\n"
        "Recent activity (last 14 days):\n"
        f"{logs_info or 'No logs yet'}"
    )


def build_habit_messages(body: HabitInsightsRequest) -> Messages:
    return _pair(
        habit_system_prompt(body),
        "Analyze these habit tracking patterns and provide personalized insights.",
    )


# ----------------------------
# Knowledge query
# ----------------------------

def knowledge_system_prompt(body: KnowledgeQueryRequest) -> str:
    if body.documents:
        docs_context = "\n\n".join(
            f"[{i}] {_text(doc.title)}:\n{_text(doc.content)}" for i, doc in enumerate(body.documents, start=1)
        )
    else:
        docs_context = "No documents available."

    return (
        "You are a knowledge assistant. Answer questions based on the provided documents.\n"
        "\n"
        "Rules:\n"
        "1. Only use information from the provided documents\n"
        "2. Cite sources using [1], [2], etc.\n"
        "3. If the answer isn't in the documents, say so clearly\n"
        "4. Generate action items when relevant\n"
        "5. Be concise but thorough\n"
        "\n"
        "Documents:\n"
        f"{docs_context}\n"
        "\n"
        "Respond in JSON format:\n"
        "{\n"
        '  "answer": "Your answer with [citations]",\n'
        '  "citations": [1, 2],\n'
        '  "summary": "Brief summary if applicable",\n'
        '  "actionItems": ["action 1", "action 2"],\n'
        '  "confidence": "high" | "medium" | "low"\n'
        "}"
    )


def build_knowledge_messages(body: KnowledgeQueryRequest) -> Messages:
    return _pair(knowledge_system_prompt(body), body.query)


# ----------------------------
# ATS optimizer
# ----------------------------

ATS_SYSTEM_PROMPT = (
    "You are an ATS (Applicant Tracking System) expert. Analyze resumes for ATS compatibility "
    "and provide optimization suggestions.\n"
    "\n"
    "Evaluate:\n"
    "1. Keyword optimization for the target role\n"
    "2. Formatting and structure\n"
    "3. Quantifiable achievements\n"
    "4. Skills alignment\n"
    "\n"
    "Respond in JSON format:\n"
    "{\n"
    '  "score": 0-100,\n'
    '  "missingKeywords": ["keyword1", "keyword2"],\n'
    '  "weakSections": ["section1", "section2"],\n'
    '  "suggestions": [\n'
    "    {\n"
    '      "category": "keywords" | "format" | "content" | "structure",\n'
    '      "priority": "high" | "medium" | "low",\n'
    '      "suggestion": "specific suggestion"\n'
    "    }\n"
    "  ],\n"
    '  "optimizedSummary": "An ATS-optimized professional summary",\n'
    '  "optimizedBullets": ["optimized bullet 1", "optimized bullet 2"]\n'
    "}"
)


def build_ats_messages(body: AtsOptimizerRequest) -> Messages:
    user = (
        f"Analyze this resume for the role: {body.targetRole}\n"
        "\n"
        "Resume Content:\n"
        f"{body.resumeContent}\n"
        "\n"
        "Provide ATS analysis and optimization suggestions."
    )
    return _pair(ATS_SYSTEM_PROMPT, user)


# ----------------------------
# Job assistant
# ----------------------------

def job_system_prompt(body: JobAssistantRequest) -> str:
    length = _text(body.settings and body.settings.coverLetterLength) or "3-4 paragraphs"
    tone = _text(body.settings and body.settings.tone) or "professional"
    return (
        "You are an expert career coach and resume writer. Help candidates create tailored "
        "job application materials.\n"
        "\n"
        "Given a resume and job description, generate:\n"
        "1. 5-7 tailored resume bullet points highlighting relevant experience\n"
        f"2. A compelling cover letter ({length})\n"
        "3. A brief recruiter-friendly summary (2-3 sentences)\n"
        "\n"
        f"Use a {tone} tone. Be specific and quantify achievements where possible.\n"
        "\n"
        "Respond in JSON format:\n"
        "{\n"
        '  "bullets": ["bullet1", "bullet2", ...],\n'
        '  "coverLetter": "full cover letter text",\n'
        '  "summary": "brief summary"\n'
        "}"
    )


def build_job_messages(body: JobAssistantRequest) -> Messages:
    user = (
        "Resume Content:\n"
        f"{body.resumeContent}\n"
        "\n"
        "Job Description:\n"
        f"{body.jobDescription}\n"
        "\n"
        "Generate tailored application materials."
    )
    return _pair(job_system_prompt(body), user)
