"""Fixed analysis request constants."""

DEFAULT_MODEL = "gemini-3-flash-preview"

# Bounds the model's internal reasoning before it answers.
DEFAULT_THINKING_BUDGET = 1000

DEFAULT_INSTRUCTION = (
    "请仔细观察这张图片，数一数图中一共有几个手指头？请给出明确的数字，并简单描述你看到的手掌形态。 "
    "(Please carefully count how many fingers are in this image. "
    "Provide a clear count and briefly describe the hand configuration you see.)"
)

NO_ANALYSIS_TEXT = "No analysis generated."

ANALYSIS_FAILED_TEXT = "Failed to analyze the image. Please try again."
