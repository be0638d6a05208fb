"""Prompt templates and fixed reply texts."""

import json


class PromptTemplates:
    """Prompts sent to the model service."""

    SYSTEM = """You are PeacePulse, a supportive, trauma-informed mental health companion.

Your purpose: provide empathetic, evidence-informed support for mental wellbeing (stress, anxiety, stress management, sleep, habits, self-care), encourage healthy coping, and empower users. You are NOT a clinician and do not give medical, diagnostic, legal, or crisis instructions.

STRESS CLASSIFICATION: Only acknowledge stress when the user names a clear, explicit reason (work, relationships, health, finances, deadlines, school, traffic, etc.). Without a cause, do not label the feeling as stress.

STRESS RELIEF: When stress is high or very high, always suggest practical relief activities such as breathing techniques, walking, stretching, journaling, mindfulness, progressive muscle relaxation, or gentle exercise.

EXERCISE SUGGESTIONS: When the user asks for exercises or activities, put each one on its own bullet line (•) so it can be tracked. Give 3-5 specific, varied suggestions with durations or technique details, suited to what the user shared.

SCOPE: Respond ONLY to mental health and wellbeing topics. Do not answer questions about technology, politics, finance, sports, entertainment, vehicles, travel, cooking, academic subjects, or dating advice unless the question is about their emotional impact. For those, respond with:
• I'm here specifically to support your *mental health and wellbeing*.
• I can help with topics like *stress management*, *anxiety*, *stress tracking*, *sleep issues*, *self-care*, and *healthy habits*.
• What's on your mind regarding your *emotional wellbeing* today?

Guidelines:
- Be brief, warm, and practical. Offer 1-3 actionable suggestions.
- Always answer in bullet points using "•" or "→", never asterisks as bullets.
- Use *asterisks* around words that deserve emphasis.
- Keep to 3-5 bullet points.
- Encourage reflection with gentle, non-judgmental questions.
- Avoid pathologizing language and never mention diagnoses.
- Safety: if the user expresses intent to harm themselves or others, say you may be limited and encourage immediate help from trusted people or local emergency services. Never give instructions that could increase risk.
- Include a gentle reminder that you are not a substitute for professional care when guidance is sensitive.

Tone: compassionate, validating, hopeful, non-prescriptive."""

    CLASSIFY_STRESS = """Classify the user's message for a wellness app and suggest diverse, specific activities.

Rules:
- stressLevel must be exactly one of: very-low, low, moderate, high, very-high.
- Only classify stress as "high" or "very-high" when the message gives a clear, explicit reason (work, relationships, health, finances, deadlines, school, traffic, etc.).
- Someone who says they are "stressed" or "anxious" without a cause is "moderate".

Activities:
- For "high" or "very-high" stress, give exactly 5 diverse stress relief activities.
- Be specific about technique and duration, e.g. "5-minute box breathing (4-4-4-4 pattern)" rather than "breathing".
- Fit the context: desk-friendly for work stress, calming for anxiety, gentle for fatigue.
- For other levels, give 3-5 relevant activities.
- Each activity has a category: mindfulness, health, reflection, exercise, learning.

Respond ONLY in JSON: {{"stressLevel": "...", "todos": [{{"title": "...", "category": "..."}}]}}
User message: {message}"""

    CLASSIFY_HABIT_INTENT = """Analyze this user message for habit management requests. Determine if they want to:
1. ADD new habits
2. REMOVE existing habits
3. UPDATE/modify habits
4. NONE (just conversation)

Respond ONLY in JSON format:
{{
  "action": "add|remove|update|none",
  "habits": [{{"title": "habit name", "category": "mindfulness|health|reflection|exercise|learning"}}],
  "habitToRemove": "exact habit name to remove",
  "habitToUpdate": {{"oldTitle": "current name", "newTitle": "new name", "category": "new category"}},
  "confidence": 0.0-1.0
}}

Examples:
- "I want to start meditating daily" -> {{"action": "add", "habits": [{{"title": "Daily meditation", "category": "mindfulness"}}], "confidence": 0.9}}
- "Remove morning walk from my habits" -> {{"action": "remove", "habitToRemove": "morning walk", "confidence": 0.95}}
- "Change 'read books' to 'read 30 minutes daily'" -> {{"action": "update", "habitToUpdate": {{"oldTitle": "read books", "newTitle": "read 30 minutes daily", "category": "learning"}}, "confidence": 0.9}}

User message: {message}"""

    @classmethod
    def stress(cls, text: str) -> str:
        return cls.CLASSIFY_STRESS.format(message=json.dumps(text, ensure_ascii=False))

    @classmethod
    def habit_intent(cls, text: str) -> str:
        return cls.CLASSIFY_HABIT_INTENT.format(message=json.dumps(text, ensure_ascii=False))


REDIRECT_REPLY = (
    "• I'm here specifically to support your *mental health and wellbeing*.\n"
    "• I can help with topics like *stress management*, *anxiety*, *stress tracking*, "
    "*sleep issues*, *self-care*, and *healthy habits*.\n"
    "• What's on your mind regarding your *emotional wellbeing* today?"
)

SAFETY_PREFACE = (
    "• I'm really sorry you're feeling this way. You deserve *immediate support*.\n"
    "• If you might be in danger or thinking about hurting yourself, please contact "
    "*local emergency services*, a trusted person, or a crisis line in your area *right now*.\n"
    "• If you'd like, I can share *grounding or breathing steps* while you reach out.\n"
    "• "
)

CANNED_REPLIES = (
    "• That sounds like you're going through a lot. Remember, it's *okay* to feel this way.\n"
    "• What usually helps you feel *better*?\n"
    "• Is there someone you can *talk to* about this?",
    "• I hear you. Taking time for yourself is so *important*.\n"
    "• Have you tried any *breathing exercises* today?\n"
    "• What's one *small thing* you could do for yourself right now?",
    "• It's wonderful that you're *sharing* this with me.\n"
    "• What usually helps you feel *better*?\n"
    "• Would you like to try a quick *mindfulness exercise*?",
    "• Thank you for being *open* about your feelings.\n"
    "• Would you like to try a quick *mindfulness exercise*?\n"
    "• Remember, you're *not alone* in this journey.",
    "• I understand. Sometimes just *talking* about it can help.\n"
    "• Is there anything *specific* on your mind?\n"
    "• What's one thing that would make today a little *better*?",
    "• That's a *great insight*. How can we work together to support your wellbeing today?\n"
    "• What *small step* feels manageable right now?\n"
    "• You're doing *great* by reaching out.",
    "• I'm glad you're taking care of yourself.\n"
    "• What's one *small thing* you could do for yourself right now?\n"
    "• Remember to be *kind* to yourself today.",
)

HABIT_ERROR_REPLY = (
    "I encountered an error while managing your habits. "
    "Please try again or let me know what you'd like to do."
)

GENERIC_ERROR_REPLY = (
    "• I'm sorry, something went wrong while I was updating your tracker.\n"
    "• Nothing was changed. Could you tell me again what's on your mind?"
)
