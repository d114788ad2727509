"""
Tests for play metadata records and validation
"""

import pytest
from jsonschema import ValidationError

from plays.metadata import PlayMetadata, PlayMetadataValidator
from transactions.composer import generate_create_play_script


class TestPlayMetadata:
    """Test play metadata conversion."""

    def test_to_record_uses_contract_keys(self):
        """Test that attributes map to contract record keys."""
        metadata = PlayMetadata(full_name="Ja Morant", jersey_number="12", draft_year=2019)
        assert metadata.to_record() == {
            "FullName": "Ja Morant",
            "JerseyNumber": "12",
            "DraftYear": 2019,
        }

    def test_unset_fields_dropped(self):
        """Test that empty fields are not emitted."""
        assert PlayMetadata(full_name="", play_type=None).to_record() == {}

    def test_extra_keys(self):
        """Test that extra keys are carried through."""
        metadata = PlayMetadata(full_name="Ja Morant", extra={"Tagline": "Up high"})
        assert metadata.to_record()["Tagline"] == "Up high"

    def test_from_record(self, sample_play_record):
        """Test parsing a record."""
        metadata = PlayMetadata.from_record(sample_play_record)

        assert metadata.full_name == "Ja Morant"
        assert metadata.team_at_moment == "Memphis Grizzlies"
        assert metadata.draft_year == 2019
        assert metadata.to_record() == sample_play_record

    def test_from_on_chain_strings(self):
        """Test that numeric fields stored as strings are parsed."""
        metadata = PlayMetadata.from_record({"Height": "75", "HomeTeamScore": "101"})
        assert metadata.height == 75
        assert metadata.home_team_score == 101

    def test_unknown_keys_go_to_extra(self):
        """Test that unknown keys are preserved."""
        metadata = PlayMetadata.from_record({"FullName": "A", "Custom": "B"})
        assert metadata.extra == {"Custom": "B"}

    def test_json_round_trip(self, sample_play_record):
        """Test JSON conversion."""
        metadata = PlayMetadata.from_record(sample_play_record)
        assert PlayMetadata.from_json(metadata.to_json()) == metadata

    def test_compose_from_metadata(self):
        """Test composing a create-play script from metadata."""
        script = generate_create_play_script(
            "0x01",
            PlayMetadata(full_name="Ja Morant", draft_year=2019).to_record()
        )
        assert b'createPlay(metadata: {"DraftYear": "2019", "FullName": "Ja Morant"})' in script


class TestPlayMetadataValidator:
    """Test play metadata schema validation."""

    def setup_method(self):
        """Set up test fixtures."""
        self.validator = PlayMetadataValidator()
        self.strict = PlayMetadataValidator(strict=True)

    def test_valid_record(self, sample_play_record):
        """Test a valid record."""
        assert self.validator.validate(sample_play_record)
        assert self.strict.is_valid(sample_play_record)

    def test_metadata_object(self):
        """Test validating a PlayMetadata instance."""
        assert self.strict.is_valid(PlayMetadata(full_name="Ja Morant"))

    @pytest.mark.parametrize("record", [
        {"Height": 1.98},
        {"Active": True},
        {"DraftYear": -1},
        {"Tags": ["a"]},
        {"": "empty key"},
    ])
    def test_invalid_values(self, record):
        """Test rejection of unsupported values."""
        assert not self.validator.is_valid(record)
        with pytest.raises(ValidationError):
            self.validator.validate(record)

    def test_strict_requires_full_name(self):
        """Test that strict validation requires FullName."""
        record = {"FirstName": "Ja"}
        assert self.validator.is_valid(record)
        errors = self.strict.get_validation_errors(record)
        assert len(errors) == 1
        assert errors[0].startswith("root:")

    def test_error_path(self):
        """Test that errors name the offending key."""
        errors = self.validator.get_validation_errors({"Height": 1.98})
        assert errors and errors[0].startswith("Height:")
