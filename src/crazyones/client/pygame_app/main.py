from __future__ import annotations

import argparse
import logging

import pygame  # type: ignore[import-not-found]

from crazyones.logging_utils import setup_logging
from crazyones.paths import get_paths
from crazyones.services.content import ContentError, ContentService, Settings

from .app import App, GameContext
from .asset_manager import AssetManager
from .scenes.boot import BootScene

logger = logging.getLogger(__name__)


def main() -> int:
    parser = argparse.ArgumentParser(prog="crazyones")
    parser.add_argument("--width", type=int, default=None)
    parser.add_argument("--height", type=int, default=None)
    parser.add_argument("--ai-delay", type=float, default=None, help="Seconds the computer 'thinks' per turn.")
    parser.add_argument("--log-level", default=None, choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    parser.add_argument("--seed", type=int, default=None, help="Deal every game from this seed.")
    args = parser.parse_args()

    paths = get_paths()
    content = ContentService(data_dir=paths.data_dir, schema_dir=paths.schema_dir)
    settings_error: ContentError | None = None
    try:
        settings = content.load_settings()
    except ContentError as e:
        # BootScene re-validates and reports this on screen.
        settings = Settings()
        settings_error = e

    settings = settings.with_overrides(
        window_width=args.width,
        window_height=args.height,
        ai_think_delay=args.ai_delay,
        log_level=args.log_level,
    )
    setup_logging(settings.log_level)
    if settings_error is not None:
        logger.warning("Falling back to default settings: %s", settings_error)
    logger.info("Starting with %s", settings)

    pygame.init()
    screen = pygame.display.set_mode((settings.window_width, settings.window_height))
    pygame.display.set_caption("Crazy Ones")

    ctx = GameContext(
        screen=screen,
        clock=pygame.time.Clock(),
        paths=paths,
        assets=AssetManager(),
        content=content,
        settings=settings,
        seed=args.seed,
    )

    app = App(ctx, BootScene(ctx))
    try:
        return app.run()
    finally:
        pygame.quit()


if __name__ == "__main__":
    raise SystemExit(main())
