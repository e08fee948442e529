from __future__ import annotations

import logging
from dataclasses import dataclass

from ..config import Config
from ..services.storage.request_log import RequestLog, UploadApi
from ..services.storage.upload_store import UploadStore
from ..services.validate_service import ValidateService


@dataclass(frozen=True)
class Container:
    validate: ValidateService
    store: UploadStore
    request_log: RequestLog
    api: UploadApi


def build_container(base_logger_name: str, cfg: Config) -> Container:
    base = logging.getLogger(base_logger_name)
    validate = ValidateService(base.getChild("validate"), max_string_length=cfg.max_string_length)
    store = UploadStore(base.getChild("store"))
    request_log = RequestLog(base.getChild("api"))
    api = UploadApi(
        store, request_log, page_size=cfg.page_size, search_limit=cfg.search_limit
    )
    return Container(validate=validate, store=store, request_log=request_log, api=api)
