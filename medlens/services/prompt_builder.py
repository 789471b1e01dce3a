"""Helpers to construct system/user prompts for the Gemini calls.

Given the caller's analysis options (role, focus, mode, notes) we emit:
* A system instruction describing the reviewer persona and strict JSON contract.
* A user prompt embedding the options verbatim plus mode-specific depth hints.

The chat, narration, transcription and illustration prompts live here too so
every instruction sent to the remote service can be reviewed in one place.
"""

from __future__ import annotations

from typing import Iterable

ANALYSIS_SYSTEM_INSTRUCTION = """You are an expert medical research analyst who reviews clinical studies, lab reports, imaging, and medical videos.
Read every attached document carefully, compare them when more than one is provided, and explain them faithfully without inventing data.

Respond with a single JSON object containing exactly these keys:
- "plain_summary": string, a jargon-free overview.
- "key_findings": array of strings, the most important results.
- "methods": string, study design, population, and procedures.
- "data_interpretation": string, what the numbers, tables, and graphs show.
- "risks": string, safety signals and adverse events.
- "limitations": string, bias, confounders, and gaps.
- "patient_explanation": string, explanation for a patient or family member.
- "clinician_explanation": string, mechanistic explanation for a clinician.
- "cross_comparison": string, agreement or conflict across documents ("Not applicable" for a single document).
- "clinical_takeaway": string, the single most actionable conclusion.
- "markdown_report": string, a complete Markdown report covering all of the above.
- "study_type": string, e.g. "Randomized controlled trial".
- "evidence_strength": one of "Low", "Medium", "High".
- "evidence_clarity": one of "Low", "Medium", "High".
- "document_quality": one of "Limited", "Moderate", "Strong".
- "key_signals": array of short tags (two to four words each).

This is educational content, not medical advice. Say so in the markdown report."""

CHAT_SYSTEM_INSTRUCTION = """You are a helpful medical research assistant answering follow-up questions about documents that were already analyzed.
Ground every answer in the document context below. If the context does not contain the answer, say so plainly instead of guessing.
Keep answers concise, explain jargon, and remind the user that this is not medical advice when they ask for personal recommendations."""

NARRATION_SYSTEM_INSTRUCTION = """You write short spoken narrations of medical document analyses.
Turn the provided analysis into a natural, friendly script of about two minutes when read aloud.
Do not use Markdown, bullet points, headings, or stage directions. Do not read out URLs."""

TRANSCRIPTION_INSTRUCTION = (
    "Transcribe this clinical audio note accurately. Focus on correct spelling of "
    "medical terminology, medication names, and dosages. Do not add any "
    "conversational filler or introductory text. Return only the transcript."
)

QUICK_MODE_INSTRUCTION = (
    "INSTRUCTION: Perform a 'Quick Scan'. Prioritize the Plain Summary and Key "
    "Findings. Keep the Clinician Explanation and Methods sections concise and "
    "direct. Focus on extracting the most critical facts immediately."
)

DEEP_MODE_INSTRUCTION = (
    "INSTRUCTION: Perform a 'Deep Analysis'. Prioritize thoroughness. Provide "
    "detailed mechanistic explanations in the Clinician section. Evaluate risks "
    "and limitations critically. Ensure the Data Interpretation is comprehensive."
)

JSON_ONLY_INSTRUCTION = (
    "Return the strictly structured JSON as defined in system instructions. "
    "Do not include markdown formatting like ```json."
)

NARRATION_FALLBACK = "Here is a summary of your document."


def build_analysis_prompt(
    *,
    role: str,
    focus_area: str,
    mode: str,
    notes: str = "",
    quick: bool,
) -> str:
    """Render the user prompt that accompanies the encoded documents."""

    prompt = (
        "Please analyze the attached medical documents.\n"
        "CONTEXT:\n"
        f"User Role: {role}\n"
        f"Focus Area: {focus_area}\n"
        f"Analysis Mode: {mode}\n"
    )

    if notes.strip():
        prompt += f"\nUSER NOTES: {notes}"

    prompt += "\n\n" + (QUICK_MODE_INSTRUCTION if quick else DEEP_MODE_INSTRUCTION)
    prompt += "\n\n" + JSON_ONLY_INSTRUCTION
    return prompt


def build_chat_instruction(context: str) -> str:
    """Bind the conversational policy to one document context."""

    return f"{CHAT_SYSTEM_INSTRUCTION}\n\nDOCUMENT CONTEXT:\n{context}"


def build_narration_context(
    *,
    plain_summary: str,
    key_findings: Iterable[str],
    methods: str,
    data_interpretation: str,
    risks: str,
    limitations: str,
    clinical_takeaway: str,
) -> str:
    """Flatten the analysis fields the narrator needs into one text block."""

    findings = "\n".join(key_findings)
    return (
        f"PLAIN SUMMARY: {plain_summary}\n"
        f"KEY FINDINGS: {findings}\n"
        f"METHODS: {methods}\n"
        f"DATA INTERPRETATION: {data_interpretation}\n"
        f"RISKS: {risks}\n"
        f"LIMITATIONS: {limitations}\n"
        f"CLINICAL TAKEAWAY: {clinical_takeaway}"
    )


def build_illustration_prompt(summary: str) -> str:
    return (
        "Create a professional, educational medical illustration that visually "
        f"explains this summary: {summary}. Style: Clean, detailed, scientific "
        "diagram on a white background. No text labels."
    )


__all__ = [
    "ANALYSIS_SYSTEM_INSTRUCTION",
    "CHAT_SYSTEM_INSTRUCTION",
    "NARRATION_FALLBACK",
    "NARRATION_SYSTEM_INSTRUCTION",
    "TRANSCRIPTION_INSTRUCTION",
    "build_analysis_prompt",
    "build_chat_instruction",
    "build_illustration_prompt",
    "build_narration_context",
]
