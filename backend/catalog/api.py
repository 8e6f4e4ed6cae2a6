from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from .cache import MoodboardCache


class CatalogView(APIView):
    permission_classes = [permissions.AllowAny]

    def get_catalog_cache(self) -> MoodboardCache:
        return MoodboardCache()


class MoodboardCalendarView(CatalogView):
    def get(self, request, *args, **kwargs):
        return Response(self.get_catalog_cache().calendar())


class MoodboardDiscoverView(CatalogView):
    def get(self, request, *args, **kwargs):
        try:
            limit = max(1, min(int(request.query_params.get("limit", 50)), 100))
            offset = max(0, int(request.query_params.get("offset", 0)))
        except (TypeError, ValueError):
            return Response({"detail": "limit and offset must be integers."}, status=status.HTTP_400_BAD_REQUEST)
        tags = [tag for tag in request.query_params.get("tags", "").split(",") if tag]
        return Response(self.get_catalog_cache().discover(limit=limit, offset=offset, tags=tags))


class MoodboardDetailView(CatalogView):
    def get(self, request, moodboard_id, *args, **kwargs):
        data = self.get_catalog_cache().moodboard(moodboard_id)
        if data is None:
            return Response({"detail": "Moodboard not found."}, status=status.HTTP_404_NOT_FOUND)
        return Response(data)


class ModelSearchView(CatalogView):
    def get(self, request, *args, **kwargs):
        return Response(self.get_catalog_cache().models(request.query_params.get("q", "")))


class MoodboardListView(CatalogView):
    def get(self, request, *args, **kwargs):
        return Response(self.get_catalog_cache().all_moodboards())


class MoodboardSearchView(CatalogView):
    def get(self, request, *args, **kwargs):
        return Response(self.get_catalog_cache().search(request.query_params.get("q", "")))


class SimilarMoodboardsView(CatalogView):
    def get(self, request, *args, **kwargs):
        try:
            main_id = int(request.query_params.get("main_id", 0))
        except (TypeError, ValueError):
            main_id = 0
        if main_id < 1:
            return Response({"detail": "Main moodboard ID is required."}, status=status.HTTP_400_BAD_REQUEST)
        return Response(self.get_catalog_cache().similar(main_id))
