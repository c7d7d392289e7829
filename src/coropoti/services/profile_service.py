from typing import Any, Dict, Optional, Tuple

from app_lib.api.client import api_client
from config.settings import config
from models.models import PROFILE_FORM_FIELDS, Profile


class ProfileService:
    def __init__(self, client=None):
        self.client = client or api_client
        self.endpoints = config.endpoints

    def get_my_profile(self) -> Optional[Profile]:
        response = self.client.get(f"{self.endpoints.profile}/me", timeout=config.request_timeout)
        return Profile(**response) if response else None

    def get_profile(self, user_id) -> Optional[Profile]:
        response = self.client.get(f"{self.endpoints.profile}/{user_id}", timeout=config.request_timeout)
        return Profile(**response) if response else None

    def save_profile(
        self,
        fields: Dict[str, Any],
        picture: Optional[Tuple[str, bytes, Optional[str]]] = None,
    ) -> Dict[str, Any]:
        """Multipart save of the known profile fields and an optional picture."""
        files = [
            (name, (None, str(fields[name])))
            for name in PROFILE_FORM_FIELDS
            if fields.get(name) not in (None, '')
        ]
        if picture:
            name, content, mime = picture
            files.append(('picture', (name, content, mime or 'application/octet-stream')))
        return self.client.upload(f"{self.endpoints.profile}/save", files=files, timeout=config.upload_timeout)

    def remove_profile(self) -> Dict[str, Any]:
        return self.client.delete(f"{self.endpoints.profile}/remove", timeout=config.request_timeout)


# Export singleton
profile_service = ProfileService()
