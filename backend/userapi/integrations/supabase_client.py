"""Supabase client initialization as a Flask extension."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from flask import Flask
from loguru import logger
from supabase import Client, create_client

from ..errors import PersistenceError


@dataclass
class _SBClients:
    anon: Optional[Client] = None
    service: Optional[Client] = None


class SupabaseExt:
    def __init__(self, app: Flask | None = None) -> None:
        self.clients = _SBClients()
        if app is not None:
            self.init_app(app)

    def init_app(self, app: Flask) -> None:
        url = app.config.get("SUPABASE_URL")
        anon_key = app.config.get("SUPABASE_ANON_KEY")
        service_key = app.config.get("SUPABASE_SERVICE_ROLE_KEY")
        try:
            if url and anon_key:
                self.clients.anon = create_client(url, anon_key)
            if url and service_key:
                self.clients.service = create_client(url, service_key)
        except Exception as exc:  # invalid url or key
            raise PersistenceError("could not create Supabase client") from exc
        if self.clients.anon or self.clients.service:
            logger.info("Supabase client initialized for {}", url)
        app.extensions["supabase"] = self

    @property
    def anon(self) -> Optional[Client]:
        return self.clients.anon

    @property
    def service(self) -> Optional[Client]:
        return self.clients.service
