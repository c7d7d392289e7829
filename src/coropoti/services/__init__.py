"""Services package - Business logic layer"""
from .auth_service import AuthService, auth_service
from .directory_service import DirectoryService, directory_service
from .event_service import EventService, event_service
from .profile_service import ProfileService, profile_service

__all__ = [
    'AuthService',
    'auth_service',
    'DirectoryService',
    'directory_service',
    'EventService',
    'event_service',
    'ProfileService',
    'profile_service'
]
