"""Prompts for food recognition.

The model is asked for a short, comma separated list so the answer can
be split without any JSON parsing. Composite dishes are preferred over
their components to avoid counting the same nutrients twice.
"""

FOOD_LIST_PROMPT = (
    "List 1-3 main foods in this image, preferring composite dishes like fried rice "
    "as single items. Separate with commas. Exclude 'and', 'etc' or additional "
    "descriptions."
)
