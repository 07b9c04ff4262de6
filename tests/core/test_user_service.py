import pytest

from core.service import (
    calculate_difficulty,
    escape_regex,
    generate_token,
    is_valid_object_id,
    slugify,
    validate_password,
    validate_reset_token_format,
    validate_username,
)


class TestUserService:
    def test_generate_token_is_64_hex_characters(self):
        token = generate_token()

        assert len(token) == 64
        assert validate_reset_token_format(token)
        assert generate_token() != token

    @pytest.mark.parametrize(
        "username,expected",
        [("user_1", True), ("abc", True), ("ab", False), ("bad name", False), ("a" * 31, False)],
    )
    def test_validate_username(self, username, expected):
        assert validate_username(username) is expected

    def test_validate_password_requires_six_characters(self):
        assert validate_password("12345") is False
        assert validate_password("123456") is True
        assert validate_password(None) is False

    def test_reset_token_format_is_lowercase_hex(self):
        assert validate_reset_token_format("a" * 64)
        assert not validate_reset_token_format("A" * 64)
        assert not validate_reset_token_format("a" * 63)

    def test_is_valid_object_id(self):
        assert is_valid_object_id("507f1f77bcf86cd799439011")
        assert not is_valid_object_id("not-an-id")
        assert not is_valid_object_id(None)


class TestExerciseService:
    def test_slugify(self):
        assert slugify("Push-Up  (Wide)") == "push-up-wide"
        assert slugify("  Barbell Squat ") == "barbell-squat"

    def test_escape_regex(self):
        assert escape_regex(" a.b ") == r"a\.b"

    def test_simple_bodyweight_exercise_is_beginner(self):
        assert calculate_difficulty({"instructions": ["Go"], "equipment": ["bodyweight"]}) == "beginner"

    def test_precautions_push_dumbbell_exercise_to_intermediate(self):
        exercise = {"instructions": ["step"] * 6, "equipment": ["dumbbells"]}
        assert calculate_difficulty(exercise) == "beginner"

        exercise["precautions"] = ["Keep your back straight"]
        assert calculate_difficulty(exercise) == "intermediate"

    def test_complex_machine_exercise_is_advanced(self):
        exercise = {
            "instructions": ["step"] * 9,
            "equipment": ["machine"],
            "primaryMuscleGroups": ["chest", "triceps"],
            "secondaryMuscleGroups": ["shoulders"],
            "averageIntensity": 9,
        }
        assert calculate_difficulty(exercise) == "advanced"
