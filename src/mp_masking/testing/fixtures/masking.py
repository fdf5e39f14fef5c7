"""Testing fixtures – mask_processor, masking_test_scope, clean_condition_inputs."""
from __future__ import annotations

import pytest


@pytest.fixture
def clean_condition_inputs():
    """Clear condition inputs before and after the test."""
    from mp_masking.application.masking.conditions import ConditionInputs

    ConditionInputs.clear()
    yield
    ConditionInputs.clear()


@pytest.fixture
def masking_test_scope(request):
    """Open a TEST converter scope keyed by the pytest node id.

    Converters registered with ``ConverterScope.TEST`` during the test are
    visible only to it and are discarded on teardown::

        def test_custom(masking_test_scope, mask_processor):
            masking_test_scope.register_converter(ConverterScope.TEST, MyConverter())
    """
    from mp_masking.application.masking.converters import get_converter_registry

    registry = get_converter_registry()
    with registry.test_scope(request.node.nodeid):
        yield registry


@pytest.fixture
def mask_processor(clean_condition_inputs):
    """A :class:`MaskProcessor` on the shared registries, with clean inputs."""
    from mp_masking.application.masking.processor import MaskProcessor

    return MaskProcessor()


__all__ = ["clean_condition_inputs", "mask_processor", "masking_test_scope"]
