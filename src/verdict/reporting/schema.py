"""JSON schema definitions for machine-readable reporter output."""
from __future__ import annotations

_STRING_NUMBER = {"type": "string", "pattern": "^-?[0-9]+$"}
_STRINGS = {"type": "array", "items": {"type": "string"}}

RUN_START_SCHEMA = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "required": ["event", "testCount", "initialSeed", "fuzzRuns", "globs", "paths"],
    "properties": {
        "event": {"const": "runStart"},
        "testCount": _STRING_NUMBER,
        "initialSeed": _STRING_NUMBER,
        "fuzzRuns": _STRING_NUMBER,
        "globs": _STRINGS,
        "paths": _STRINGS,
    },
}

TEST_COMPLETED_SCHEMA = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "required": ["event", "status", "labels", "failures", "duration"],
    "properties": {
        "event": {"const": "testCompleted"},
        "status": {"enum": ["pass", "fail", "todo"]},
        "labels": _STRINGS,
        "failures": {
            "type": "array",
            "items": {
                "anyOf": [
                    {"type": "string"},
                    {
                        "type": "object",
                        "required": ["given", "message", "reason"],
                        "properties": {
                            "given": {"type": ["string", "null"]},
                            "message": {"type": "string"},
                            "reason": {
                                "type": "object",
                                "required": ["type", "data"],
                                "properties": {"type": {"type": "string"}},
                            },
                        },
                    },
                ]
            },
        },
        "duration": _STRING_NUMBER,
    },
}

RUN_COMPLETE_SCHEMA = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "required": ["event", "passed", "failed", "duration", "autoFail"],
    "properties": {
        "event": {"const": "runComplete"},
        "passed": _STRING_NUMBER,
        "failed": _STRING_NUMBER,
        "duration": _STRING_NUMBER,
        "autoFail": {"type": ["string", "null"]},
    },
}

EXERCISM_SCHEMA = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "exercism test runner report",
    "type": "object",
    "required": ["version", "status", "tests"],
    "properties": {
        "version": {"const": 3},
        "status": {"enum": ["pass", "fail", "error"]},
        "message": {"type": ["string", "null"]},
        "tests": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["name", "task_id", "status", "message", "output", "test_code"],
                "properties": {
                    "name": {"type": "string"},
                    "task_id": {"type": ["integer", "null"]},
                    "status": {"enum": ["pass", "fail", "error"]},
                    "message": {"type": ["string", "null"]},
                    "output": {"type": ["string", "null"], "maxLength": 500},
                    "test_code": {"type": ["string", "null"]},
                },
            },
        },
    },
}
