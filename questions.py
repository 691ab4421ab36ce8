# Built-in seed questions, used when no data directory provides any.
# Each entry goes through the validator like any other candidate.

QUESTIONS = [
    {
        "kind": "multiple-choice",
        "prompt": "What is the capital of France?",
        "options": ["London", "Berlin", "Paris", "Madrid"],
        "correct_answer": "Paris",
        "difficulty": "easy",
        "category": "Geography",
    },
    {
        "kind": "true-false",
        "prompt": "The Earth is flat.",
        "correct_answer": "False",
        "difficulty": "easy",
        "category": "Science",
    },
    {
        "kind": "short-answer",
        "prompt": "Compute 3^2 + 4^2",
        "correct_answer": "25",
        "difficulty": "medium",
        "category": "Math",
    },
]
