"""JSON renderer wrapping successful payloads as ``{"success": true, "data": ...}``."""

from __future__ import annotations

from rest_framework.renderers import JSONRenderer  # type: ignore


class EnvelopeJSONRenderer(JSONRenderer):
    def render(self, data, accepted_media_type=None, renderer_context=None):  # type: ignore
        if data is None:
            return super().render(data, accepted_media_type, renderer_context)

        # Paginated lists and error responses arrive already enveloped.
        if isinstance(data, dict) and "success" in data:
            return super().render(data, accepted_media_type, renderer_context)

        response = (renderer_context or {}).get("response")
        success = response is None or response.status_code < 400
        return super().render({"success": success, "data": data}, accepted_media_type, renderer_context)
