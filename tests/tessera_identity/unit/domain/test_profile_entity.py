"""Unit tests for the Profile entity."""

from datetime import date

import pytest

from tessera_identity.domain.account import (
    Gender,
    InvalidProfileFieldError,
    Profile,
    ProfileUpdate,
)
from tessera_identity.domain.shared.exceptions import ValidationFailedError


class TestProfileFromHints:
    def test_prefills_names_and_picture(self):
        profile = Profile.from_provider_hints("acc", "Alice", "https://img/a.png")

        assert profile.display_name == "Alice"
        assert profile.full_name == "Alice"
        assert profile.profile_image_url == "https://img/a.png"

    def test_without_hints_is_empty(self):
        profile = Profile.from_provider_hints("acc", None, None)

        assert profile.display_name is None
        assert profile.profile_image_url is None

    def test_long_hints_are_truncated(self):
        profile = Profile.from_provider_hints("acc", "x" * 80, None)

        assert len(profile.display_name) == 50
        assert len(profile.full_name) == 80


class TestProfileUpdate:
    def test_apply_sets_fields(self):
        profile = Profile.empty("acc")

        changed = profile.apply(
            ProfileUpdate(
                display_name="Al",
                birth_date=date(1990, 1, 2),
                gender=Gender.OTHER,
                bio="hello",
            ),
        )

        assert changed is True
        assert profile.display_name == "Al"
        assert profile.birth_date == date(1990, 1, 2)
        assert profile.gender == Gender.OTHER

    def test_apply_without_changes(self):
        profile = Profile.empty("acc")
        profile.apply(ProfileUpdate(location="Seoul"))

        assert profile.apply(ProfileUpdate(location="Seoul")) is False

    def test_none_leaves_field_alone(self):
        profile = Profile.empty("acc")
        profile.apply(ProfileUpdate(bio="keep me"))

        profile.apply(ProfileUpdate(location="Berlin"))

        assert profile.bio == "keep me"

    def test_clear_and_blank(self):
        profile = Profile.empty("acc")
        profile.apply(ProfileUpdate(bio="x", location="y"))

        profile.apply(ProfileUpdate(location="   ", clear=frozenset({"bio"})))

        assert profile.bio is None
        assert profile.location is None

    def test_clear_unknown_field(self):
        with pytest.raises(ValidationFailedError):
            Profile.empty("acc").apply(ProfileUpdate(clear=frozenset({"password"})))

    @pytest.mark.parametrize(
        ("field", "limit"),
        [("display_name", 50), ("phone_number", 20), ("bio", 1000)],
    )
    def test_length_limits(self, field, limit):
        update = ProfileUpdate(**{field: "x" * (limit + 1)})

        with pytest.raises(InvalidProfileFieldError) as exc_info:
            Profile.empty("acc").apply(update)

        assert exc_info.value.field == field


class TestProfileSoftDelete:
    def test_soft_delete_and_restore(self):
        profile = Profile.empty("acc")

        assert profile.soft_delete() is True
        assert profile.is_deleted
        assert profile.soft_delete() is False

        assert profile.restore() is True
        assert not profile.is_deleted
        assert profile.restore() is False
