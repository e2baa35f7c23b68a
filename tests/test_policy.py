from __future__ import annotations

from typing import Any, Optional, Union

import pytest

from mockery.models.execution import ResultPolicy
from mockery.policy import infer_policy, policy_for_annotation
from tests.fakes import Endpoint, MockUserService


class _LocalThing:
    pass


def _returns_local() -> _LocalThing | None:
    return None


def _no_annotation(x):
    return x


class TestInferPolicy:
    def test_mock_methods(self) -> None:
        service = MockUserService()
        assert infer_policy(service.greet) is ResultPolicy.required
        assert infer_policy(service.fetch_user) is ResultPolicy.required
        assert infer_policy(service.find_cache) is ResultPolicy.optional
        assert infer_policy(service.find_legacy) is ResultPolicy.optional
        assert infer_policy(service.track) is ResultPolicy.void

    def test_coroutine_methods_use_declared_result(self) -> None:
        service = MockUserService()
        assert infer_policy(service.load_profile) is ResultPolicy.required
        assert infer_policy(service.lookup_alias) is ResultPolicy.optional
        assert infer_policy(service.flush) is ResultPolicy.void

    def test_missing_annotation_is_required(self) -> None:
        assert infer_policy(_no_annotation) is ResultPolicy.required

    def test_symbolic_keys_are_required(self) -> None:
        assert infer_policy("send") is ResultPolicy.required
        assert infer_policy(Endpoint.users) is ResultPolicy.required

    def test_string_annotations_are_classified(self) -> None:
        def inner() -> Missing | None:  # noqa: F821
            return None

        assert infer_policy(inner) is ResultPolicy.optional
        assert infer_policy(_returns_local) is ResultPolicy.optional


class TestPolicyForAnnotation:
    @pytest.mark.parametrize(
        ("annotation", "expected"),
        [
            (None, ResultPolicy.void),
            (type(None), ResultPolicy.void),
            (int, ResultPolicy.required),
            (Any, ResultPolicy.required),
            (Optional[int], ResultPolicy.optional),
            (Union[int, None], ResultPolicy.optional),
            (int | None, ResultPolicy.optional),
            (Union[int, str], ResultPolicy.required),
            (list[int | None], ResultPolicy.required),
        ],
    )
    def test_runtime_annotations(self, annotation: object, expected: ResultPolicy) -> None:
        assert policy_for_annotation(annotation) is expected

    @pytest.mark.parametrize(
        ("annotation", "expected"),
        [
            ("None", ResultPolicy.void),
            ("User | None", ResultPolicy.optional),
            ("None | User", ResultPolicy.optional),
            ("Optional[User]", ResultPolicy.optional),
            ("typing.Optional[User]", ResultPolicy.optional),
            ("Union[User, None]", ResultPolicy.optional),
            ("typing.Union[None, User]", ResultPolicy.optional),
            ("Union[User, Optional[str]]", ResultPolicy.optional),
            ("list[User] | None", ResultPolicy.optional),
            ("Union[User, str]", ResultPolicy.required),
            ("Union[dict[str, int | None], str]", ResultPolicy.required),
            ("User", ResultPolicy.required),
            ("dict[str, int | None]", ResultPolicy.required),
        ],
    )
    def test_string_annotations(self, annotation: str, expected: ResultPolicy) -> None:
        assert policy_for_annotation(annotation) is expected
