"""All prompt templates for Gemini API calls.

Every builder is a pure function of its inputs so the exact prompt text can
be asserted in tests.
"""

import json

from models.schemas.model_io import ResponseType
from models.schemas.session import InterviewContext
from services.interview_catalog import NON_TECHNICAL_CATEGORIES, TECHNICAL_CATEGORIES, category_name

SYSTEM_PROMPTS: dict[ResponseType, str] = {
    ResponseType.GENERAL: (
        "You are an AI interview preparation assistant. Always be professional, "
        "constructive, and focused on helping users improve their interview skills."
    ),
    ResponseType.INTERVIEW: (
        "You are a professional AI interviewer. Be conversational, ask follow-ups, "
        "and ask one question at a time. Keep responses under 100 words."
    ),
    ResponseType.FEEDBACK: (
        "You are an interview performance evaluator. Provide detailed, constructive "
        "feedback combining resume analysis with interview performance. Be specific and actionable."
    ),
    ResponseType.JSON: (
        "You are an expert resume analyzer and career advisor. Respond with a single "
        "valid JSON object and nothing else."
    ),
}


def _stack(tech_stack: list[str]) -> str:
    return ", ".join(tech_stack) if tech_stack else "General"


def _context_block(context: InterviewContext) -> str:
    lines = [
        f"- Role: {context.role}",
        f"- Level: {context.level}",
        f"- Tech Stack: {_stack(context.tech_stack)}",
    ]
    if context.company:
        lines.append(f"- Company: {context.company}")
    if context.category:
        lines.append(f"- Interview Type: {category_name(context.category)}")
    if context.duration:
        lines.append(f"- Duration: {context.duration}")
    return "\n".join(lines)


def build_resume_analysis_prompt(resume_text: str, category: str = "general") -> str:
    """Resume analysis with interview category recommendations."""
    technical = ", ".join(TECHNICAL_CATEGORIES)
    non_technical = ", ".join(NON_TECHNICAL_CATEGORIES)

    return f"""Analyze this resume and provide structured JSON output with interview category recommendations.

TARGET CATEGORY: {category}

RESUME TEXT:
---
{resume_text}
---

Respond with ONLY valid JSON in this exact structure:
{{
  "overallScore": <integer 0-100>,
  "atsCompatibility": <integer 0-100>,
  "industryMatch": <integer 0-100>,
  "experienceLevel": "<entry|mid|senior|lead>",
  "detectedRole": "<primary role detected>",
  "detectedIndustry": "<primary industry>",
  "strengths": ["<strength 1>", "<strength 2>", "<strength 3>", "<strength 4>"],
  "improvements": ["<improvement 1>", "<improvement 2>", "<improvement 3>", "<improvement 4>"],
  "keywords": {{
    "present": ["<keyword1>", "<keyword2>", "<keyword3>"],
    "missing": ["<missing1>", "<missing2>", "<missing3>"]
  }},
  "recommendedInterviews": [
    {{
      "category": "<interview category id>",
      "name": "<interview name>",
      "match": <integer 0-100>,
      "reason": "<why this interview is recommended>"
    }}
  ],
  "nextSteps": ["<actionable step 1>", "<actionable step 2>", "<actionable step 3>"]
}}

Recommend exactly three interviews, using only these category ids:
TECHNICAL: {technical}
NON-TECHNICAL: {non_technical}"""


def build_question_set_prompt(role: str, level: str, tech_stack: list[str], count: int = 5) -> str:
    """Role-specific question set, mixing behavioral and technical questions."""
    return f"""Generate {count} interview questions for a {role} position at {level} level.

FOCUS AREAS: {_stack(tech_stack)}

REQUIREMENTS:
- Mix behavioral (40%) and technical (60%) questions
- Progressive difficulty from warm-up to challenging
- Role-specific scenarios and examples
- Include follow-up probes for each question

Respond with ONLY valid JSON in this exact structure:
{{
  "questions": [
    {{
      "id": 1,
      "type": "<behavioral|technical>",
      "question": "<main question text>",
      "followUps": ["<probe deeper>", "<clarify specifics>"],
      "expectedElements": ["<e.g. STAR method>", "<specific metrics>"],
      "difficulty": "<easy|medium|hard>",
      "timeAllocation": "<e.g. 2-3 minutes>"
    }}
  ]
}}"""


def build_interview_opening_prompt(context: InterviewContext, resume_summary: dict | None = None) -> str:
    """Interviewer's greeting and first question."""
    resume_section = ""
    if resume_summary:
        resume_section = f"""
CANDIDATE RESUME SUMMARY:
{json.dumps(resume_summary, indent=2, sort_keys=True)}
"""

    return f"""You are Sarah, a friendly and professional AI interviewer starting a practice interview.

INTERVIEW CONTEXT:
{_context_block(context)}
{resume_section}
Generate a warm, professional opening that:
1. Welcomes the candidate and introduces you as their AI interviewer
2. Explains that this is a safe practice environment
3. Asks one engaging opening question about their background

Keep it conversational and under 100 words."""


def build_interview_turn_prompt(context: InterviewContext, transcript: str, candidate_message: str) -> str:
    """Next interviewer line in a text interview."""
    return f"""You are Sarah, conducting a {context.role} interview at {context.level} level.

INTERVIEW CONTEXT:
{_context_block(context)}

CONVERSATION SO FAR:
{transcript or "Just started"}

CANDIDATE RESPONSE:
"{candidate_message}"

Provide a natural interviewer response that:
1. Acknowledges their answer appropriately
2. Asks one relevant follow-up question
3. Stays focused on {_stack(context.tech_stack)} skills
4. Maintains a professional interview tone

Keep the response under 100 words and conversational."""


def build_voice_turn_prompt(context: InterviewContext, transcript: str, spoken_text: str) -> str:
    """Next interviewer line in a voice interview; shorter, meant to be spoken."""
    return f"""You are Sarah, conducting a spoken {context.role} interview at {context.level} level.

CONVERSATION SO FAR:
{transcript or "Just started"}

The candidate just said: "{spoken_text}"

Respond as Sarah would out loud: acknowledge what they said and ask one relevant
follow-up question. Plain sentences only, no lists or markdown. Under 80 words."""


def build_final_feedback_prompt(context: InterviewContext, transcript: str) -> str:
    """End-of-interview feedback on the candidate's performance."""
    return f"""Analyze this interview performance and provide feedback.

INTERVIEW CONTEXT:
{_context_block(context)}

INTERVIEW TRANSCRIPT:
{transcript}

Respond with ONLY valid JSON in this exact structure:
{{
  "overallScore": <integer 0-100>,
  "performance": {{
    "technical": <integer 0-100>,
    "communication": <integer 0-100>,
    "problemSolving": <integer 0-100>,
    "confidence": <integer 0-100>
  }},
  "strengths": ["<strength 1 with specific example>", "<strength 2>", "<strength 3>"],
  "improvements": ["<improvement 1 with actionable advice>", "<improvement 2>", "<improvement 3>"],
  "nextSteps": ["<specific action 1>", "<specific action 2>", "<specific action 3>"],
  "summary": "<2-3 sentence encouraging but honest summary>"
}}"""


def build_comprehensive_report_prompt(
    context: InterviewContext,
    transcript: str,
    resume_analysis: dict | None = None,
) -> str:
    """Report combining the resume analysis with interview performance."""
    resume_text = (
        json.dumps(resume_analysis, indent=2, sort_keys=True)
        if resume_analysis
        else "No resume analysis available"
    )

    return f"""Analyze this interview performance against the candidate's resume and provide comprehensive feedback.

INTERVIEW CONTEXT:
{_context_block(context)}

RESUME ANALYSIS:
{resume_text}

INTERVIEW TRANSCRIPT:
{transcript}

Respond with ONLY valid JSON in this exact structure:
{{
  "overallScore": <integer 0-100>,
  "duration": "<interview duration>",
  "questionsAnswered": <integer>,
  "performance": {{
    "technical": <integer 0-100>,
    "communication": <integer 0-100>,
    "problemSolving": <integer 0-100>,
    "confidence": <integer 0-100>
  }},
  "strengths": ["<strength 1 with specific example>", "<strength 2>", "<strength 3>"],
  "improvements": ["<improvement 1 with actionable advice>", "<improvement 2>", "<improvement 3>"],
  "resumeAlignment": {{
    "score": <integer 0-100, how well the interview matched the resume>,
    "gaps": ["<gap 1>", "<gap 2>"],
    "highlights": ["<highlight 1>", "<highlight 2>"]
  }},
  "nextSteps": ["<specific action 1>", "<specific action 2>", "<specific action 3>"],
  "recommendedPractice": ["<practice area 1>", "<practice area 2>", "<practice area 3>"]
}}"""
