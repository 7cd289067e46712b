"""Shared fixtures: a small Petstore document exercising every schema shape."""

import copy
from typing import Any

import pytest

from taggem.parser.oas_parser import OASParser, ParsedDocument

_PET_REF = {"$ref": "#/components/schemas/Pet"}

PETSTORE: dict[str, Any] = {
    "openapi": "3.0.0",
    "info": {"title": "Petstore", "version": "1.0.0"},
    "servers": [{"url": "https://api.example.com/v1"}],
    "paths": {
        "/pets/{id}": {
            "get": {
                "tags": ["pets"],
                "summary": "Find pet by id",
                "parameters": [
                    {"name": "id", "in": "path", "required": True, "schema": {"type": "string"}},
                ],
                "responses": {
                    "200": {"description": "ok", "content": {"application/json": {"schema": _PET_REF}}},
                },
            },
            "delete": {
                "tags": ["pets"],
                "operationId": "deletePet",
                "parameters": [
                    {"name": "id", "in": "PATH", "required": True, "schema": {"type": "string"}},
                ],
                "responses": {"204": {"description": "deleted"}},
            },
        },
        "/pets": {
            "get": {
                "tags": ["pets", "animals"],
                "operationId": "listPets",
                "parameters": [
                    {"name": "limit", "in": "query", "description": "Page size", "schema": {"type": "integer"}},
                    {"name": "X-Trace", "in": "header", "schema": {"type": "string"}},
                ],
                "responses": {
                    "200": {
                        "description": "ok",
                        "content": {"application/json": {"schema": {"type": "array", "items": _PET_REF}}},
                    },
                },
            },
            "post": {
                "tags": ["pets"],
                "operationId": "createPet",
                "requestBody": {
                    "content": {"application/json": {"schema": {"$ref": "#/components/schemas/NewPet"}}},
                },
                "responses": {
                    "201": {"description": "created", "content": {"application/json": {"schema": _PET_REF}}},
                },
            },
        },
        "/health": {
            "get": {"responses": {"200": {"description": "ok"}}},
        },
    },
    "components": {
        "schemas": {
            "Pet": {
                "type": "object",
                "description": "A pet",
                "required": ["id", "name"],
                "properties": {
                    "id": {"type": "integer", "readOnly": True},
                    "name": {"type": "string", "minLength": 1, "maxLength": 64},
                    "status": {"$ref": "#/components/schemas/Status"},
                    "tags": {"type": "array", "items": {"type": "string"}},
                    "weight": {"type": "number", "minimum": 0.5, "x-units": "kg"},
                },
            },
            "NewPet": {
                "allOf": [
                    _PET_REF,
                    {"type": "object", "properties": {"owner": {"type": "string"}}},
                ],
            },
            "Status": {"type": "string", "enum": ["active", "inactive"]},
            "PetOrError": {
                "oneOf": [_PET_REF, {"$ref": "#/components/schemas/Error"}],
            },
            "Error": {
                "type": "object",
                "properties": {
                    "code": {"type": "integer"},
                    "message": {"type": "string"},
                },
            },
        }
    },
}


@pytest.fixture
def petstore() -> dict[str, Any]:
    """A fresh copy of the Petstore document tree."""
    return copy.deepcopy(PETSTORE)


@pytest.fixture
def parsed_petstore(petstore: dict[str, Any]) -> ParsedDocument:
    """The Petstore document, parsed."""
    return OASParser().parse_dict(petstore)
