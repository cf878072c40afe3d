"""IndexResolver: maps a document type to the site's Elasticsearch index name.

Index names follow the ElasticPress convention ``{prefix}{site-slug}-{type}``,
e.g. ``3f2a9c1b-shop-example-com-post``. The prefix comes from
``EP_INDEX_PREFIX`` when set, otherwise it is generated once and persisted in
the option store so every later request resolves the same index.
"""

from __future__ import annotations

import re
from typing import Optional
from urllib.parse import urlsplit

from ep_autosuggest.config import Config
from ep_autosuggest.services.option_store import OptionStore
from ep_autosuggest.utils.ids import new_index_prefix


INDEX_PREFIX_OPTION = "ep_index_prefix"

_NON_SLUG = re.compile(r"[^a-z0-9]+")


def site_slug(site_url: str) -> str:
    """Slugify the host and path of a site URL (``https://Shop.example.com/en`` → ``shop-example-com-en``)."""
    parts = urlsplit(site_url if "//" in site_url else f"//{site_url}")
    raw = f"{parts.netloc}{parts.path}".lower()
    return _NON_SLUG.sub("-", raw).strip("-")


class IndexResolver:
    def __init__(self, cfg: Config = Config, option_store: Optional[OptionStore] = None):
        self.cfg = cfg
        self.option_store = option_store or OptionStore(cfg=cfg)

    def index_prefix(self) -> str:
        if self.cfg.INDEX_PREFIX:
            return self.cfg.INDEX_PREFIX
        return self.option_store.get_or_create(INDEX_PREFIX_OPTION, new_index_prefix)

    def get_index_name(self, document_type: str) -> str:
        doc_type = (document_type or "").strip().lower()
        if not doc_type:
            raise ValueError("document_type is required")
        slug = site_slug(self.cfg.SITE_URL)
        base = f"{slug}-{doc_type}" if slug else doc_type
        return f"{self.index_prefix()}{base}"
