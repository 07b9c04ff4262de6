from bson import ObjectId

from infrastructure.repositories.exercise_repository import (
    build_exercise_match,
    build_sort_stage,
    facet_page,
    range_query,
    unpack_facet,
)
from infrastructure.repositories.workout_repository import build_workout_match, lookup_stages

USER_ID = "64b7f0c2a1b2c3d4e5f60001"


class TestExerciseMatch:
    def test_empty_filters(self):
        assert build_exercise_match({}) == {}

    def test_scalar_and_list_filters(self):
        match = build_exercise_match(
            {
                "category": "strength",
                "isApproved": True,
                "primaryMuscleGroups": "chest",
                "equipment": ["dumbbells", "barbell"],
            }
        )

        assert match == {
            "category": "strength",
            "isApproved": True,
            "primaryMuscleGroups": {"$in": ["chest"]},
            "equipment": {"$in": ["dumbbells", "barbell"]},
        }

    def test_ranges(self):
        match = build_exercise_match(
            {"caloriesRange": {"min": 5}, "intensityRange": {"min": 3, "max": 8}}
        )

        assert match["caloriesPerMinute"] == {"$gte": 5}
        assert match["averageIntensity"] == {"$gte": 3, "$lte": 8}

    def test_empty_range_is_ignored(self):
        assert range_query({}) == {}
        assert "caloriesPerMinute" not in build_exercise_match({"caloriesRange": {}})

    def test_search_is_escaped_case_insensitive(self):
        match = build_exercise_match({"search": " push.up "})

        assert {"name": {"$regex": r"push\.up", "$options": "i"}} in match["$or"]
        assert len(match["$or"]) == 6

    def test_created_by_becomes_object_id(self):
        assert build_exercise_match({"createdBy": USER_ID})["createdBy"] == ObjectId(USER_ID)


class TestPaging:
    def test_sort_stage_has_id_tiebreaker(self):
        assert build_sort_stage({"field": "name", "order": "desc"}) == {
            "$sort": {"name": -1, "_id": 1}
        }

    def test_facet_page_skips_previous_pages(self):
        stage = facet_page(3, 10)

        assert stage["$facet"]["data"] == [{"$skip": 20}, {"$limit": 10}]

    def test_unpack_facet(self):
        assert unpack_facet([]) == ([], 0)
        assert unpack_facet([{"data": [], "totalCount": []}]) == ([], 0)
        assert unpack_facet([{"data": [{"name": "a"}], "totalCount": [{"count": 7}]}]) == (
            [{"name": "a"}],
            7,
        )


class TestWorkoutMatch:
    def test_public_only_by_default(self):
        assert build_workout_match({}) == {"isPublic": True}

    def test_include_private_for_owner(self):
        match = build_workout_match({"userId": USER_ID, "includePrivate": True})

        assert match == {"userId": ObjectId(USER_ID)}

    def test_duration_defaults(self):
        assert build_workout_match({"duration": {"max": 45}})["estimatedDuration"] == {
            "$gte": 0,
            "$lte": 45,
        }
        assert build_workout_match({"duration": {}})["estimatedDuration"] == {
            "$gte": 0,
            "$lte": 300,
        }

    def test_rating_sponsor_and_lists(self):
        match = build_workout_match(
            {"minRating": 4, "isSponsored": False, "tags": "legs", "difficulty": ["beginner"]}
        )

        assert match["averageRating"] == {"$gte": 4}
        assert match["isSponsored"] is False
        assert match["tags"] == {"$in": ["legs"]}
        assert match["difficulty"] == {"$in": ["beginner"]}

    def test_lookup_stages(self):
        assert lookup_stages(False, False) == []
        assert len(lookup_stages(True, False)) == 2
        assert len(lookup_stages(True, True)) == 3
