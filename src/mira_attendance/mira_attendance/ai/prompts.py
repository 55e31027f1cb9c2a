"""Prompt templates and response schemas for the AI tools."""

FACE_VERIFICATION_PROMPT = """Analyze the two images. The first is a student's reference photo, the second is a live photo. Verify if it's the same person.
First, assess the live photo's quality. Is it clear, well-lit, and suitable for verification? Quality must be "GOOD" or "POOR".
Second, determine if the faces match.
Respond in JSON with three fields:
1. "quality": (string) "GOOD" or "POOR".
2. "isMatch": (boolean) True for a match, false otherwise.
3. "reason": (string) If quality is POOR, explain why (e.g., "Blurry photo"). If no match, state "Faces do not match". If it is a match, state "OK".
Example: { "quality": "GOOD", "isMatch": true, "reason": "OK" }"""

FACE_VERIFICATION_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "quality": {"type": "STRING", "format": "enum", "enum": ["GOOD", "POOR"]},
        "isMatch": {"type": "BOOLEAN"},
        "reason": {"type": "STRING"},
    },
    "required": ["quality", "isMatch", "reason"],
}

SUMMARIZE_NOTES = "Summarize the following notes into concise bullet points:\n\n{text}"
GENERATE_QUESTIONS = (
    "Generate 5 likely exam questions (a mix of short and long answer) based on the following topic: {text}"
)
CREATE_STORY = (
    "Convert the following academic notes into an engaging, story-style summary suitable for "
    "explaining the concept to a beginner:\n\n{text}"
)
CREATE_MIND_MAP = (
    'Create a text-based mind map for the topic "{text}". Use indentation to show hierarchy. '
    "Start with the central topic and branch out to main ideas, then sub-points."
)
EXPLAIN_CONCEPT = (
    "Explain the following concept in simple terms, as if explaining it to a high school student "
    "(ELI5 style):\n\n{text}"
)
GENERATE_PPT = (
    "Convert the following notes into a structured presentation format. Create a main title and at "
    "least 3 slides with titles and bullet points:\n\n{text}"
)
GENERATE_QUIZ = (
    "Create a quiz with 5 questions (mix of multiple-choice and short-answer) on the topic: {text}. "
    "For multiple choice, provide 4 options."
)
GENERATE_LESSON_PLAN = (
    'Create a detailed lesson plan for the topic: "{text}". The lesson should be structured with clear '
    "objectives, a sequence of activities with time allocations, and an assessment method."
)
TRANSCRIBE_AUDIO = "Transcribe the speech in this audio recording. Return only the transcript."

PPT_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "title": {"type": "STRING", "description": "The main title of the presentation."},
        "slides": {
            "type": "ARRAY",
            "description": "An array of slide objects.",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "title": {"type": "STRING", "description": "The title of the slide."},
                    "points": {
                        "type": "ARRAY",
                        "description": "Key bullet points for the slide.",
                        "items": {"type": "STRING"},
                    },
                    "notes": {"type": "STRING", "description": "Speaker notes for the slide."},
                },
                "required": ["title", "points"],
            },
        },
    },
    "required": ["title", "slides"],
}

QUIZ_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "title": {"type": "STRING", "description": "The title of the quiz."},
        "questions": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "type": {"type": "STRING", "format": "enum", "enum": ["multiple-choice", "short-answer"]},
                    "question": {"type": "STRING"},
                    "options": {"type": "ARRAY", "items": {"type": "STRING"}},
                    "answer": {"type": "STRING"},
                },
                "required": ["type", "question", "answer"],
            },
        },
    },
    "required": ["title", "questions"],
}

LESSON_PLAN_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "title": {"type": "STRING", "description": "Engaging title for the lesson plan."},
        "topic": {"type": "STRING", "description": "The core topic being covered."},
        "duration": {"type": "STRING", "description": "Estimated duration of the lesson, e.g., '60 minutes'."},
        "objectives": {
            "type": "ARRAY",
            "description": "List of learning objectives.",
            "items": {"type": "STRING"},
        },
        "activities": {
            "type": "ARRAY",
            "description": "Sequence of activities for the lesson.",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "name": {"type": "STRING", "description": "Name of the activity, e.g., 'Introduction'."},
                    "duration": {"type": "STRING", "description": "Time allocated for this activity."},
                    "description": {"type": "STRING", "description": "Detailed description of the activity."},
                },
                "required": ["name", "duration", "description"],
            },
        },
        "assessment": {"type": "STRING", "description": "Method for assessing student understanding."},
    },
    "required": ["title", "topic", "duration", "objectives", "activities", "assessment"],
}
