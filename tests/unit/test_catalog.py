"""Unit tests for the model catalog."""

from datetime import datetime

from faim_api.engine.catalog import MODEL_CATALOG, TIREX_QUANTILES, list_models, supports_multivariate


def test_list_models() -> None:
    result = list_models()

    assert result.success
    assert result.error is None
    assert [model.id for model in result.data.models] == ["chronos2", "tirex"]
    assert datetime.fromisoformat(result.data.timestamp).tzinfo is not None


def test_models_support_both_output_types() -> None:
    for model in MODEL_CATALOG.values():
        assert model.supported_output_types == ["point", "quantiles"]
        assert model.supports_quantiles


def test_supports_multivariate() -> None:
    assert supports_multivariate("chronos2")
    assert not supports_multivariate("tirex")
    assert not supports_multivariate("unknown")


def test_tirex_quantile_ladder() -> None:
    assert TIREX_QUANTILES == [0.1, 0.2, 0.3, 0.4, 0.5, 0.6, 0.7, 0.8, 0.9]
