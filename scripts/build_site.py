import logging
import sys

import httpx

from app.db.prismic import PrismicClient
from app.repos.posts_repo import PrismicPostsRepo
from app.services.posts_service import PostsService
from app.services.site_builder import SiteBuilder
from app.settings import settings

logger = logging.getLogger(__name__)

if __name__ == "__main__":
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    output_dir = sys.argv[1] if len(sys.argv) > 1 else settings.BUILD_OUTPUT_DIR

    with httpx.Client(timeout=settings.PRISMIC_TIMEOUT) as http:
        client = PrismicClient(
            http,
            settings.PRISMIC_API_ENDPOINT,
            access_token=settings.PRISMIC_ACCESS_TOKEN,
        )
        repo = PrismicPostsRepo(client)
        report = SiteBuilder(PostsService(repo), repo, output_dir).build()

    if report.ok:
        logger.info(f"Site built in {output_dir}")
    else:
        for failure in report.failed:
            logger.error(f"{failure['path']}: {failure['error']}")
        sys.exit(1)
