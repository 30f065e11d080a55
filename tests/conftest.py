"""Test configuration and helpers."""

from uuid import uuid4

import logfire
from dishka import AsyncContainer

from stackit.domain.model import Answer, Question, User
from stackit.domain.service import AnswerService, QuestionService, UserService
from stackit.domain.value import UserId

# Keep spans local; nothing is exported during tests
logfire.configure(send_to_logfire=False, console=False)


async def make_user(env: AsyncContainer, username: str | None = None) -> User:
    """Provision a profile for a fresh user ID.

    Args:
        env: Request-scoped test container
        username: Username to request (defaults to `user_<id prefix>`)
    """
    user_service = await env.get(UserService)
    return await user_service.ensure_profile(UserId(uuid4()), username)


async def make_question(
    env: AsyncContainer,
    author: User,
    title: str = "How do I reverse a list in Python?",
    description: str = "I have a list and need its items in reverse order.",
    tags: list[str] | None = None,
) -> Question:
    """Create a question through the question service."""
    question_service = await env.get(QuestionService)
    return await question_service.create_question(
        author, title, description, tags or ["python"]
    )


async def make_answer(
    env: AsyncContainer,
    question: Question,
    author: User,
    content: str = "Use reversed() or slice with [::-1].",
) -> Answer:
    """Create an answer through the answer service."""
    answer_service = await env.get(AnswerService)
    return await answer_service.create_answer(question.id, author, content)
