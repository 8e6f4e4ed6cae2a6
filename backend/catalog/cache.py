from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Optional

from django.conf import settings
from django.core.cache import caches

from .models import ModelProfile, Moodboard
from .serializers import ModelProfileSerializer, MoodboardDetailSerializer, MoodboardSummarySerializer

logger = logging.getLogger(__name__)

KEY_PREFIX = "catalog"


class MoodboardCache:
    """
    Read-through cache for the public moodboard and model listings.

    Entries are plain serialized data so they can live in any Django cache
    backend. Staleness is bounded by ``ttl``; writes through the admin clear
    the cache via ``catalog.signals``.
    """

    def __init__(self, *, ttl: Optional[int] = None, alias: str = "default"):
        self.ttl = settings.CATALOG_CACHE_TTL_SECONDS if ttl is None else ttl
        self.alias = alias

    @property
    def backend(self):
        return caches[self.alias]

    def _key(self, *parts: Any) -> str:
        return ":".join([KEY_PREFIX, *(str(part) for part in parts)])

    def _remember(self, key: str, loader: Callable[[], Any]) -> Any:
        cached = self.backend.get(key)
        if cached is not None:
            return cached
        value = loader()
        self.backend.set(key, value, self.ttl)
        self._track(key)
        return value

    def _track(self, key: str) -> None:
        index_key = self._key("keys")
        keys = set(self.backend.get(index_key) or [])
        keys.add(key)
        self.backend.set(index_key, sorted(keys), None)

    def clear(self) -> None:
        index_key = self._key("keys")
        keys = self.backend.get(index_key) or []
        self.backend.delete_many(list(keys) + [index_key])
        logger.debug("Cleared %d catalog cache entries.", len(keys))

    def calendar(self) -> list[dict]:
        def load():
            queryset = (
                Moodboard.objects.filter(is_active=True, date__isnull=False)
                .prefetch_related("moodboard_models")
                .order_by("date", "id")
            )
            return MoodboardSummarySerializer(queryset, many=True).data

        return self._remember(self._key("calendar"), load)

    def discover(self, *, limit: int = 50, offset: int = 0, tags: Iterable[str] | None = None) -> list[dict]:
        tag_list = sorted({tag.strip().lower() for tag in (tags or []) if tag and tag.strip()})

        def load():
            queryset = Moodboard.objects.filter(is_active=True).prefetch_related("moodboard_models").order_by("-created_at", "id")
            moodboards = list(queryset)
            if tag_list:
                moodboards = [
                    moodboard
                    for moodboard in moodboards
                    if {str(tag).lower() for tag in moodboard.tags or []} & set(tag_list)
                ]
            return MoodboardSummarySerializer(moodboards[offset:offset + limit], many=True).data

        key = self._key("discover", limit, offset, ",".join(tag_list) or "all")
        return self._remember(key, load)

    def moodboard(self, moodboard_id: int) -> Optional[dict]:
        def load():
            moodboard = Moodboard.objects.filter(pk=moodboard_id, is_active=True).first()
            if moodboard is None:
                return {}
            return MoodboardDetailSerializer(moodboard).data

        data = self._remember(self._key("moodboard", moodboard_id), load)
        return data or None

    def models(self, query: str = "") -> list[dict]:
        query = query.strip()

        def load():
            queryset = ModelProfile.objects.filter(is_active=True)
            if query:
                queryset = queryset.filter(name__icontains=query)
            return ModelProfileSerializer(queryset.order_by("name"), many=True).data

        return self._remember(self._key("models", query.lower() or "all"), load)

    def all_moodboards(self) -> list[dict]:
        def load():
            queryset = Moodboard.objects.filter(is_active=True).prefetch_related("moodboard_models").order_by("date", "id")
            return MoodboardSummarySerializer(queryset, many=True).data

        return self._remember(self._key("all"), load)

    def search(self, query: str) -> list[dict]:
        """Match title, description or tags; queries shorter than two characters match nothing."""
        term = query.strip().lower()
        if len(term) < 2:
            return []

        def load():
            moodboards = [
                moodboard
                for moodboard in Moodboard.objects.filter(is_active=True).prefetch_related("moodboard_models")
                if term in moodboard.title.lower()
                or term in moodboard.description.lower()
                or any(term in str(tag).lower() for tag in moodboard.tags or [])
            ]
            return MoodboardSummarySerializer(moodboards, many=True).data

        return self._remember(self._key("search", term), load)

    def similar(self, moodboard_id: int, *, limit: int = 6) -> list[dict]:
        """Other active moodboards ranked by shared tags, then by matching style."""

        def load():
            main = Moodboard.objects.filter(pk=moodboard_id).first()
            if main is None:
                return []
            main_tags = {str(tag).lower() for tag in main.tags or []}
            scored = []
            for moodboard in Moodboard.objects.filter(is_active=True).exclude(pk=main.pk).prefetch_related("moodboard_models"):
                shared = len(main_tags & {str(tag).lower() for tag in moodboard.tags or []})
                same_style = bool(main.style) and moodboard.style == main.style
                if shared or same_style:
                    scored.append((-shared, not same_style, moodboard.pk, moodboard))
            scored.sort(key=lambda item: item[:3])
            return MoodboardSummarySerializer([item[3] for item in scored[:limit]], many=True).data

        return self._remember(self._key("similar", moodboard_id, limit), load)
