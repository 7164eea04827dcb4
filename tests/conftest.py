"""Global pytest fixtures for deterministic test environment."""

from __future__ import annotations

import json
from typing import Callable, List, Tuple, Union

import pytest

from resume_designer.retry import RetryPolicy, fixed_backoff


@pytest.fixture(autouse=True)
def _isolate_runtime_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clear local runtime env that can leak into tests on developer machines."""
    for key in (
        "RESUME_DESIGNER_PROVIDER",
        "RESUME_DESIGNER_MODEL",
        "RESUME_DESIGNER_TEMPLATES_URL",
        "OPENAI_API_KEY",
        "GEMINI_API_KEY",
        "DEEPSEEK_API_KEY",
        "KIMI_API_KEY",
        "GLM_API_KEY",
    ):
        monkeypatch.delenv(key, raising=False)


SAMPLE_RESUME = """\
Jane Smith
jane.smith@email.com | (555) 123-4567

Professional Summary
Software engineer with 8 years of experience building web platforms.

Work Experience
Senior Software Engineer, Acme Corp (Jan 2020 - Present)
- Led a team of 5 engineers delivering a microservices platform
- Cut deployment time by 40% through CI/CD automation

Skills
Python, TypeScript, AWS, Docker, PostgreSQL

Education
B.S. Computer Science, State University
"""


def design_html(accent: str = "#1d4ed8", extra_css: str = "", extra_body: str = "") -> str:
    """A generator-style resume document using ``accent`` and neutral grays."""
    return f"""<!DOCTYPE html>
<html>
<head>
<meta charset="UTF-8">
<style>
@import url('https://fonts.googleapis.com/css2?family=Lato:wght@400;700&display=swap');
body {{ font-family: 'Lato', sans-serif; padding: 20px; max-width: 800px; margin: 0 auto; color: #333333; }}
h1 {{ color: #1a1a1a; }}
h2 {{ color: {accent}; border-bottom: 2px solid {accent}; }}
{extra_css}
</style>
</head>
<body style="padding: 40px">
<header><h1>Jane Smith</h1><p>jane.smith@email.com | (555) 123-4567</p></header>
<section><h2>Professional Summary</h2><p>Software engineer with 8 years of experience.</p></section>
<section><h2>Work Experience</h2><h3>Senior Software Engineer, Acme Corp</h3><p>Jan 2020 - Present</p>
<ul><li>Led a team of 5 engineers</li><li>Cut deployment time by 40%</li></ul></section>
<section><h2>Skills</h2><ul><li>Python, TypeScript, AWS</li></ul></section>
<section><h2>Education</h2><p>B.S. Computer Science, State University</p></section>
{extra_body}
</body>
</html>"""


def design_response(html: str) -> str:
    return json.dumps({"html": html})


Response = Union[str, BaseException]


class ScriptedClient:
    """Generation client whose responses come from ``responder``.

    ``responder(system_prompt, user_prompt, call_number)`` returns the raw
    response text, or an exception instance to raise.
    """

    def __init__(self, responder: Callable[[str, str, int], Response]):
        self.responder = responder
        self.calls: List[Tuple[str, str]] = []

    async def generate(self, system_prompt: str, user_prompt: str) -> str:
        self.calls.append((system_prompt, user_prompt))
        result = self.responder(system_prompt, user_prompt, len(self.calls))
        if isinstance(result, BaseException):
            raise result
        return result


@pytest.fixture
def sample_resume() -> str:
    return SAMPLE_RESUME


@pytest.fixture
def make_html() -> Callable[..., str]:
    return design_html


@pytest.fixture
def make_response() -> Callable[[str], str]:
    return design_response


@pytest.fixture
def scripted_client() -> Callable[[Callable[[str, str, int], Response]], ScriptedClient]:
    return ScriptedClient


@pytest.fixture
def sleeps() -> List[float]:
    return []


@pytest.fixture
def retry_policy(sleeps: List[float]) -> RetryPolicy:
    """Default policy (3 attempts, 2s fixed backoff) that records delays instead of sleeping."""

    async def _record(delay: float) -> None:
        sleeps.append(delay)

    return RetryPolicy(max_attempts=3, backoff=fixed_backoff(2.0), sleep=_record)
