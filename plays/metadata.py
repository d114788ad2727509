"""
TopShot Transaction Generator - Play Metadata

This module provides the play metadata record attached to every play, its
conversion to and from the ``{String: String}`` record stored on chain, and
JSON schema validation of metadata records before they are turned into
create-play transactions.
"""

import json
from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Optional, Union

from jsonschema import Draft7Validator, ValidationError


RecordValue = Union[str, int]


def _key(name: str):
    return field(default=None, metadata={"record_key": name})


@dataclass
class PlayMetadata:
    """Metadata describing a play; record keys follow the contract's naming."""

    # Player
    full_name: Optional[str] = _key("FullName")
    first_name: Optional[str] = _key("FirstName")
    last_name: Optional[str] = _key("LastName")
    birthdate: Optional[str] = _key("Birthdate")
    birthplace: Optional[str] = _key("Birthplace")
    jersey_number: Optional[str] = _key("JerseyNumber")
    draft_team: Optional[str] = _key("DraftTeam")
    draft_year: Optional[int] = _key("DraftYear")
    draft_selection: Optional[str] = _key("DraftSelection")
    draft_round: Optional[str] = _key("DraftRound")
    team_at_moment_nba_id: Optional[str] = _key("TeamAtMomentNBAID")
    team_at_moment: Optional[str] = _key("TeamAtMoment")
    primary_position: Optional[str] = _key("PrimaryPosition")
    player_position: Optional[str] = _key("PlayerPosition")
    height: Optional[int] = _key("Height")
    weight: Optional[int] = _key("Weight")
    total_years_experience: Optional[str] = _key("TotalYearsExperience")

    # Moment
    nba_season: Optional[str] = _key("NbaSeason")
    date_of_moment: Optional[str] = _key("DateOfMoment")
    play_category: Optional[str] = _key("PlayCategory")
    play_type: Optional[str] = _key("PlayType")
    home_team_name: Optional[str] = _key("HomeTeamName")
    away_team_name: Optional[str] = _key("AwayTeamName")
    home_team_score: Optional[int] = _key("HomeTeamScore")
    away_team_score: Optional[int] = _key("AwayTeamScore")

    # Keys without a dedicated attribute
    extra: Dict[str, RecordValue] = field(default_factory=dict)

    @classmethod
    def _record_fields(cls):
        return [f for f in fields(cls) if "record_key" in f.metadata]

    def to_record(self) -> Dict[str, RecordValue]:
        """Convert to the on-chain record, dropping unset fields."""
        record: Dict[str, RecordValue] = dict(self.extra)
        for f in self._record_fields():
            value = getattr(self, f.name)
            if value is not None and value != "":
                record[f.metadata["record_key"]] = value
        return record

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "PlayMetadata":
        """Create metadata from a record; unknown keys are kept in ``extra``."""
        by_key = {f.metadata["record_key"]: f for f in cls._record_fields()}
        kwargs: Dict[str, Any] = {}
        extra: Dict[str, RecordValue] = {}

        for key, value in record.items():
            f = by_key.get(key)
            if f is None:
                extra[key] = value
            elif f.type == Optional[int] and isinstance(value, str) and value.isdigit():
                kwargs[f.name] = int(value)
            else:
                kwargs[f.name] = value

        return cls(extra=extra, **kwargs)

    def to_json(self, indent: Optional[int] = None) -> str:
        """Convert record to JSON string."""
        return json.dumps(self.to_record(), indent=indent, sort_keys=True)

    @classmethod
    def from_json(cls, json_str: str) -> "PlayMetadata":
        """Create metadata from a JSON record."""
        return cls.from_record(json.loads(json_str))


class PlayMetadataSchema:
    """JSON schemas for play metadata records."""

    RECORD_SCHEMA = {
        "$schema": "http://json-schema.org/draft-07/schema#",
        "title": "TopShot Play Metadata",
        "type": "object",
        "propertyNames": {
            "type": "string",
            "minLength": 1
        },
        "additionalProperties": {
            "anyOf": [
                {"type": "string"},
                {"type": "integer", "minimum": 0}
            ]
        }
    }

    STRICT_SCHEMA = {
        **RECORD_SCHEMA,
        "required": ["FullName"],
        "properties": {
            "FullName": {
                "type": "string",
                "minLength": 1
            }
        }
    }


class PlayMetadataValidator:
    """Validates play metadata records against JSON schemas."""

    def __init__(self, strict: bool = False):
        schema = PlayMetadataSchema.STRICT_SCHEMA if strict else PlayMetadataSchema.RECORD_SCHEMA
        self.validator = Draft7Validator(schema)

    def _as_record(self, metadata: Union[Dict[str, Any], PlayMetadata]) -> Dict[str, Any]:
        if isinstance(metadata, PlayMetadata):
            return metadata.to_record()
        return metadata

    def validate(self, metadata: Union[Dict[str, Any], PlayMetadata]) -> bool:
        """
        Validate a metadata record.

        Raises:
            ValidationError: If the record is invalid
        """
        self.validator.validate(self._as_record(metadata))
        return True

    def get_validation_errors(self, metadata: Union[Dict[str, Any], PlayMetadata]) -> List[str]:
        """Get list of validation errors without raising exception."""
        errors = []
        for error in self.validator.iter_errors(self._as_record(metadata)):
            error_path = " -> ".join(str(p) for p in error.path) if error.path else "root"
            errors.append(f"{error_path}: {error.message}")
        return errors

    def is_valid(self, metadata: Union[Dict[str, Any], PlayMetadata]) -> bool:
        """Check if metadata is valid without raising exceptions."""
        try:
            self.validate(metadata)
            return True
        except ValidationError:
            return False
