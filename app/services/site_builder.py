"""
Pre-renders page props to JSON files.

Every page is rendered on its own: a CMS or document error fails that page
only and is recorded in the manifest, the rest of the site still builds.
Posts published after the build are served through the fallback page.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List

from pydantic import BaseModel

from app.exceptions import BlogError
from app.schemas.blog import PostPage, RenderState, RequestContext

logger = logging.getLogger(__name__)

FALLBACK_FILE = "_fallback.json"


@dataclass
class BuildReport:
    rendered: List[str] = field(default_factory=list)
    failed: List[Dict[str, str]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed

    def manifest(self) -> dict:
        return {
            "paths": self.rendered,
            "fallback": True,
            "failed": self.failed,
        }


class SiteBuilder:
    def __init__(self, service, repo, output_dir):
        self.service = service
        self.repo = repo
        self.output_dir = Path(output_dir)
        self.context = RequestContext()

    def build(self) -> BuildReport:
        report = BuildReport()

        self._render(report, "/", "index.json", lambda: self.service.list_page(self.context))

        try:
            slugs = self.repo.list_slugs(ref=self.context.ref)
        except BlogError as e:
            logger.error(f"Could not list post paths: {e}")
            report.failed.append(_failure("/post/*", e))
            slugs = []

        post_dir = (self.output_dir / "post").resolve()
        for slug in slugs:
            if (post_dir / f"{slug}.json").resolve().parent != post_dir:
                logger.error(f"Refusing to build post with unsafe slug {slug!r}")
                report.failed.append(
                    _failure(f"/post/{slug}", ValueError(f"unsafe slug {slug!r}"))
                )
                continue
            self._render(
                report,
                f"/post/{slug}",
                f"post/{slug}.json",
                lambda slug=slug: self.service.get_post_page(slug, self.context),
            )

        self._write(f"post/{FALLBACK_FILE}", PostPage.loading())
        self._write_json("manifest.json", report.manifest())
        logger.info(
            f"Built {len(report.rendered)} pages, {len(report.failed)} failed"
        )
        return report

    def _render(self, report: BuildReport, path: str, filename: str, render) -> None:
        try:
            page = render()
        except BlogError as e:
            logger.error(f"Failed to build {path}: {e}")
            report.failed.append(_failure(path, e))
            return
        self._write(filename, page)
        report.rendered.append(path)

    def _write(self, filename: str, page: BaseModel) -> None:
        self._write_json(filename, page.model_dump(mode="json"))

    def _write_json(self, filename: str, payload) -> None:
        target = self.output_dir / filename
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(
            json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8"
        )


def _failure(path: str, error: Exception) -> Dict[str, str]:
    return {
        "path": path,
        "state": RenderState.ERROR.value,
        "error": f"{type(error).__name__}: {error}",
    }
