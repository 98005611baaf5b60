"""
Промпты и схема ответа для Gemini.

Тексты инструкций модели — на английском (язык магазина и каталога).
"""

from typing import Sequence

from google.genai import types


IDENTIFICATION_PROMPT = """Identify the book in this image. Extract the exact Title and Author name.
Also detect the bounding box of the book itself in the image (ymin, xmin, ymax, xmax) on a scale of 0 to {scale}.
Finally, categorize this book into ONE OR MORE of the following categories: {categories}.
Select all that apply. If unsure, choose the most relevant ones. Never invent a category outside this list."""


SYNOPSIS_PROMPT = """Provide a synopsis for the book "{title}" by "{author}".

Instructions:
1. First, USE GOOGLE SEARCH to find the official publisher's blurb, back cover text, or a reputable review.
2. If found, synthesize this information into a single, engaging paragraph.
3. IF NO INFORMATION IS FOUND ONLINE: You MUST GENERATE a compelling synopsis yourself based on the title, author, and likely genre. Do not say "I couldn't find it". Write a synopsis that would help sell the book in a second-hand bookstore.
4. STRICT CONSTRAINT: The synopsis MUST be less than {max_words} words.
5. Return ONLY the synopsis text. Do not include introductory phrases."""


def build_identification_prompt(labels: Sequence[str], scale: int) -> str:
    return IDENTIFICATION_PROMPT.format(scale=scale, categories=", ".join(labels))


def build_synopsis_prompt(title: str, author: str, max_words: int) -> str:
    return SYNOPSIS_PROMPT.format(title=title, author=author, max_words=max_words)


def build_identification_schema(labels: Sequence[str], scale: int) -> types.Schema:
    """
    Схема JSON ответа распознавания.

    categories ограничены enum из контролируемого словаря.
    """
    return types.Schema(
        type=types.Type.OBJECT,
        properties={
            "title": types.Schema(type=types.Type.STRING),
            "author": types.Schema(type=types.Type.STRING),
            "categories": types.Schema(
                type=types.Type.ARRAY,
                items=types.Schema(type=types.Type.STRING, enum=list(labels)),
                description="List of fitting categories from the provided list",
            ),
            "box_2d": types.Schema(
                type=types.Type.ARRAY,
                items=types.Schema(type=types.Type.NUMBER),
                description=f"Bounding box of the book [ymin, xmin, ymax, xmax] on a scale of 0 to {scale}",
            ),
        },
        required=["title", "author", "box_2d", "categories"],
    )
