"""Prompt templates for note summaries and tags."""


def create_summary_prompt(content: str) -> str:
    """Prompt asking for a 3-6 bullet point summary."""
    return f"""다음 텍스트를 3-6개의 불릿 포인트로 요약해주세요. 핵심 내용만 간결하게 정리해주세요:

{content}

요약:"""


def create_tag_prompt(content: str) -> str:
    """Prompt asking for up to 6 comma-separated tags of 2-3 words."""
    return f"""다음 텍스트의 주요 주제와 키워드를 바탕으로 최대 6개의 관련 태그를 생성해주세요. 각 태그는 2-3단어로 구성하고 쉼표로 구분해주세요:

{content}

태그:"""
