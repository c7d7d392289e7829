from typing import List

from app_lib.api.client import api_client
from config.settings import config
from models.models import Cluster, Invitation, LegendEntry, User


class DirectoryService:
    """Offices, users, legend and invitations for the signed-in account."""

    def __init__(self, client=None):
        self.client = client or api_client
        self.endpoints = config.endpoints

    def invitations(self) -> List[Invitation]:
        response = self.client.get(self.endpoints.invitations, timeout=config.request_timeout)
        rows = response if isinstance(response, list) else response.get('invitations', [])
        return [Invitation(**row) for row in rows]

    def users(self) -> List[User]:
        response = self.client.get(self.endpoints.users, timeout=config.request_timeout)
        rows = response if isinstance(response, list) else response.get('users', [])
        return [User(**row) for row in rows]

    def legend(self) -> List[LegendEntry]:
        response = self.client.get(f"{self.endpoints.users}/legend", timeout=config.request_timeout)
        rows = response if isinstance(response, list) else response.get('legend', [])
        return [LegendEntry(**row) for row in rows]

    def legend_clusters(self) -> List[Cluster]:
        response = self.client.get(f"{self.endpoints.users}/legend/clusters", timeout=config.request_timeout)
        rows = response if isinstance(response, list) else response.get('clusters', [])
        return [Cluster(**row) for row in rows]


# Export singleton
directory_service = DirectoryService()
