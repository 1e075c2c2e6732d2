"""
Dependency providers; every collaborator is owned by the application instance
"""

from fastapi import Request
from sqlalchemy.orm import sessionmaker

from clipshare.services.catalog import VideoCatalog
from clipshare.services.credential_store import CredentialStore
from clipshare.services.uploader import VideoUploadService


def get_catalog(request: Request) -> VideoCatalog:
    return request.app.state.catalog


def get_upload_service(request: Request) -> VideoUploadService:
    return request.app.state.upload_service


def get_credential_store(request: Request) -> CredentialStore:
    return request.app.state.credential_store


def get_session_factory(request: Request) -> sessionmaker:
    return request.app.state.session_factory
