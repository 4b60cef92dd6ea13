"""Turn a theme into a set of status-tracked coloring pages."""

import asyncio
import logging
from typing import Awaitable, Callable, Optional

from ..config import DEFAULT_PAGE_COUNT
from ..exceptions import InvalidTransitionError
from ..util.gemini import GeminiAPI
from .describe_scenes import generate_page_prompts
from .generate_artwork import generate_coloring_image
from .models import ColoringPage, GenerationSession, PageStatus, WorkflowStep

logger = logging.getLogger(__name__)

SESSION_ERROR_MESSAGE = "Something went wrong while creating your coloring book. Please try again!"

UpdateCallback = Callable[[GenerationSession], Awaitable[None]]


class PageGenerationPipeline:
    """
    Generate scene descriptions, then one image per page.

    Pages are rendered strictly in order, one at a time, unless
    max_concurrent is raised above 1. Every status change is published
    through on_update so observers can show partial progress. A failed
    page never stops the remaining pages.
    """

    def __init__(
        self,
        api: GeminiAPI,
        page_count: int = DEFAULT_PAGE_COUNT,
        max_concurrent: int = 1,
        on_update: Optional[UpdateCallback] = None
    ):
        """
        Args:
            api: Configured GeminiAPI used for text and image calls
            page_count: Number of pages per book
            max_concurrent: Parallel image requests (1 = sequential)
            on_update: Awaited with the session after every state change
        """
        if max_concurrent < 1:
            raise ValueError("max_concurrent must be at least 1")
        self.api = api
        self.page_count = page_count
        self.max_concurrent = max_concurrent
        self.on_update = on_update

    async def _publish(self, session: GenerationSession) -> None:
        if self.on_update is not None:
            await self.on_update(session)

    async def generate(self, session: GenerationSession, theme: str) -> GenerationSession:
        """
        Start a new book for theme on session and run the pipeline.

        Args:
            session: Session to fill; moved into the generating step
            theme: Book theme

        Returns:
            The same session (see run)
        """
        session.begin(theme)
        return await self.run(session)

    async def run(self, session: GenerationSession) -> GenerationSession:
        """
        Run the whole book generation for a session already in the generating step.

        Returns:
            The same session, in the results step on success or back in
            the input step with an error message on pipeline failure

        Raises:
            InvalidTransitionError: If session.begin() was not called first
        """
        if not session.is_generating or session.current_step != WorkflowStep.GENERATING:
            raise InvalidTransitionError("Session is not in the generating step")
        theme = session.theme
        await self._publish(session)

        try:
            descriptions = await generate_page_prompts(self.api, theme, self.page_count)
            session.load_pages(descriptions)
            await self._publish(session)

            if self.max_concurrent == 1:
                for page in session.pages:
                    await self._generate_page(session, page)
            else:
                semaphore = asyncio.Semaphore(self.max_concurrent)

                async def generate_bounded(page: ColoringPage) -> None:
                    async with semaphore:
                        await self._generate_page(session, page)

                await asyncio.gather(*[generate_bounded(p) for p in session.pages])

        except Exception as e:
            logger.error(f"Book generation failed for theme '{theme}': {e}")
            session.fail(SESSION_ERROR_MESSAGE)
            await self._publish(session)
            return session

        logger.info(
            f"Generated {session.completed_count}/{len(session.pages)} pages "
            f"for theme '{session.theme}'"
        )
        session.finish()
        await self._publish(session)
        return session

    async def _generate_page(self, session: GenerationSession, page: ColoringPage) -> None:
        """Render one page, recording completion or failure on the page."""
        page.transition(PageStatus.GENERATING)
        await self._publish(session)

        try:
            image_url = await generate_coloring_image(self.api, page.prompt)
        except Exception as e:
            logger.error(f"Failed to generate page {page.id}: {e}")
            page.transition(PageStatus.FAILED)
        else:
            page.transition(PageStatus.COMPLETED, image_url=image_url)

        await self._publish(session)
