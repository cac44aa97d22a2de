"""Section and column labels per output language."""
from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from ..utils.config import Language

_EN: Mapping[str, str] = MappingProxyType(
    {
        "overview": "Overview",
        "current_version": "Version information",
        "version": "Version",
        "contact_information": "Contact information",
        "contact_name": "Contact",
        "contact_email": "Contact Email",
        "license_information": "License information",
        "license": "License",
        "license_url": "License URL",
        "terms_of_service": "Terms of service",
        "uri_scheme": "URI scheme",
        "host": "Host",
        "base_path": "BasePath",
        "schemes": "Schemes",
        "servers": "Servers",
        "tags": "Tags",
        "consumes": "Consumes",
        "produces": "Produces",
        "definitions": "Definitions",
        "paths": "Paths",
        "security": "Security",
        "description": "Description",
        "parameters": "Parameters",
        "request_body": "Body",
        "responses": "Responses",
        "name": "Name",
        "type": "Type",
        "schema": "Schema",
        "required": "Required",
        "optional": "Optional",
        "default": "Default",
        "http_code": "HTTP Code",
        "in": "In",
        "flow": "Flow",
        "token_url": "Token URL",
        "authorization_url": "Authorization URL",
        "scopes": "Scopes",
    }
)

_RU: Mapping[str, str] = MappingProxyType(
    {
        "overview": "Обзор",
        "current_version": "Информация о версии",
        "version": "Версия",
        "contact_information": "Контактная информация",
        "contact_name": "Контактное лицо",
        "contact_email": "Email для связи",
        "license_information": "Информация о лицензии",
        "license": "Лицензия",
        "license_url": "URL лицензии",
        "terms_of_service": "Условия обслуживания",
        "uri_scheme": "Схема URI",
        "host": "Хост",
        "base_path": "Базовый путь",
        "schemes": "Схемы",
        "servers": "Серверы",
        "tags": "Теги",
        "consumes": "Принимает",
        "produces": "Возвращает",
        "definitions": "Определения",
        "paths": "Ресурсы",
        "security": "Безопасность",
        "description": "Описание",
        "parameters": "Параметры",
        "request_body": "Тело запроса",
        "responses": "Ответы",
        "name": "Имя",
        "type": "Тип",
        "schema": "Схема",
        "required": "Обязательный",
        "optional": "Необязательный",
        "default": "По умолчанию",
        "http_code": "HTTP код",
        "in": "Расположение",
        "flow": "Поток",
        "token_url": "URL токена",
        "authorization_url": "URL авторизации",
        "scopes": "Области доступа",
    }
)

_LABELS: Mapping[Language, Mapping[str, str]] = {Language.EN: _EN, Language.RU: _RU}


def labels_for(language: Language) -> Mapping[str, str]:
    return _LABELS[language]


__all__ = ["labels_for"]
