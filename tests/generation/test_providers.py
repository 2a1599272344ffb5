"""Tests for value providers."""

from datetime import date, datetime

import numpy as np
import pyarrow as pa
import pytest

from synth_lake.python_libs.generation.common.constants import (
    FORMAT_METADATA_KEY,
    ProviderType,
)
from synth_lake.python_libs.generation.common.exceptions import ConfigurationError
from synth_lake.python_libs.generation.common.rng import initialize_rng
from synth_lake.python_libs.generation.providers import (
    ConstantStringProvider,
    IncrementIntegerProvider,
    RandomAlphanumericProvider,
    RandomBoolProvider,
    RandomDateProvider,
    RandomDatetimeProvider,
    RandomEmailProvider,
    RandomF64Provider,
    RandomI32Provider,
    RandomI64Provider,
    ValueProvider,
    get_registered_providers,
)


def _rng(seed=0):
    return np.random.default_rng(seed)


class TestProviderRegistry:
    """Tests for provider self-registration and the factory."""

    def test_all_types_registered(self):
        """Test that every provider type tag has a registered class."""
        registered = get_registered_providers()
        for provider_type in ProviderType:
            assert str(provider_type) in registered

    def test_create_is_case_insensitive(self):
        """Test that tags are matched regardless of case."""
        provider = ValueProvider.create({"name": "id", "provider": "Increment.Integer"})
        assert isinstance(provider, IncrementIntegerProvider)

    def test_unknown_provider(self):
        """Test that an unknown tag lists the registered tags."""
        with pytest.raises(ConfigurationError, match="unknown provider 'Random.Uuid'.*random.bool"):
            ValueProvider.create({"name": "x", "provider": "Random.Uuid"})

    def test_missing_provider(self):
        """Test that a column without a provider is rejected."""
        with pytest.raises(ConfigurationError, match="Column 'x': missing 'provider'"):
            ValueProvider.create({"name": "x"})


class TestIncrementProvider:
    """Tests for the increment provider."""

    def test_defaults(self):
        """Test start 0, step 1."""
        provider = IncrementIntegerProvider.from_config({"name": "id"})
        assert provider.values(0, 5, _rng()).to_pylist() == [0, 1, 2, 3, 4]

    def test_global_indices(self):
        """Test that values follow the global row index."""
        provider = IncrementIntegerProvider(start=100, step=-2)
        assert provider.values(10, 3, _rng()).to_pylist() == [80, 78, 76]

    def test_value_is_pure(self):
        """Test that value() depends only on row index, start and step."""
        provider = IncrementIntegerProvider(start=7, step=3)
        initialize_rng(1)
        first = [provider.value(i) for i in (0, 5, 1000)]
        initialize_rng(2)
        second = [provider.value(i) for i in (1000, 5, 0)]
        assert first == [7, 22, 3007]
        assert second == list(reversed(first))

    def test_does_not_consume_rng(self):
        """Test that generation leaves the stream untouched."""
        generator = _rng(5)
        IncrementIntegerProvider().values(0, 100, generator)
        assert generator.random() == _rng(5).random()

    def test_invalid_parameter_type(self):
        """Test that a non-integer step is rejected."""
        with pytest.raises(ConfigurationError, match="Column 'id': 'step' must be an integer"):
            IncrementIntegerProvider.from_config({"name": "id", "step": "one"})

    @pytest.mark.parametrize("key,value", [("start", 2**63), ("start", -(2**63) - 1), ("step", 2**64)])
    def test_parameters_must_fit_int64(self, key, value):
        """Test that start and step outside int64 are rejected at construction."""
        with pytest.raises(ConfigurationError, match=f"Column 'id': {key} must fit"):
            IncrementIntegerProvider.from_config({"name": "id", key: value})

    def test_large_parameters_are_exact(self):
        """Test that values near the int64 limits match value()."""
        provider = IncrementIntegerProvider(start=-(2**62), step=2**62)
        assert provider.values(0, 3, _rng()).to_pylist() == [-(2**62), 0, 2**62]
        assert [provider.value(i) for i in range(3)] == [-(2**62), 0, 2**62]

    def test_overflowing_rows_rejected(self):
        """Test that rows whose value leaves int64 raise instead of wrapping."""
        provider = IncrementIntegerProvider(start=2**62, step=2**62)
        provider.check_rows(2)
        with pytest.raises(ConfigurationError, match="overflows int64 at row 2"):
            provider.check_rows(3)
        with pytest.raises(ConfigurationError, match="overflows int64"):
            provider.values(0, 3, _rng())


class TestRandomBoolProvider:
    """Tests for the random bool provider."""

    def test_values(self):
        """Test that both values appear."""
        values = RandomBoolProvider().values(0, 200, _rng()).to_pylist()
        assert set(values) == {True, False}

    def test_type(self):
        """Test the arrow type."""
        assert RandomBoolProvider().values(0, 3, _rng()).type == pa.bool_()


class TestRandomNumberProviders:
    """Tests for the random number providers."""

    def test_i32_range(self):
        """Test the half-open integer range."""
        provider = RandomI32Provider.from_config({"name": "n", "min": -2, "max": 2})
        values = provider.values(0, 1000, _rng()).to_pylist()
        assert set(values) == {-2, -1, 0, 1}

    def test_i64_default_full_range(self):
        """Test that the default range is the full signed width."""
        provider = RandomI64Provider()
        assert provider.min_value == np.iinfo(np.int64).min
        assert provider.max_value == np.iinfo(np.int64).max
        assert provider.values(0, 4, _rng()).type == pa.int64()

    @pytest.mark.parametrize("cls", [RandomI32Provider, RandomI64Provider, RandomF64Provider])
    def test_min_must_be_lower_than_max(self, cls):
        """Test that min >= max is rejected with the column name."""
        with pytest.raises(ConfigurationError, match="Column 'n'.*must be lower than max"):
            cls.from_config({"name": "n", "min": 5, "max": 5})

    def test_i32_out_of_width(self):
        """Test that a range that does not fit int32 is rejected."""
        with pytest.raises(ConfigurationError, match="does not fit"):
            RandomI32Provider.from_config({"name": "n", "min": 0, "max": 2**40})

    def test_integer_type_mismatch(self):
        """Test that a float bound is rejected for integer providers."""
        with pytest.raises(ConfigurationError, match="'min' must be an integer"):
            RandomI32Provider.from_config({"name": "n", "min": 1.5})

    def test_f64_range(self):
        """Test the half-open float range."""
        provider = RandomF64Provider.from_config({"name": "x", "min": 10, "max": 20})
        values = provider.values(0, 1000, _rng()).to_pylist()
        assert all(10.0 <= value < 20.0 for value in values)

    def test_f64_default_unit_interval(self):
        """Test the default [0, 1) range."""
        values = RandomF64Provider().values(0, 100, _rng()).to_pylist()
        assert all(0.0 <= value < 1.0 for value in values)

    def test_f64_rejects_non_numbers(self):
        """Test that a string bound is rejected."""
        with pytest.raises(ConfigurationError, match="'max' must be a number"):
            RandomF64Provider.from_config({"name": "x", "max": "big"})


class TestRandomAlphanumericProvider:
    """Tests for the alphanumeric string provider."""

    def test_default_length(self):
        """Test the default length of 10."""
        values = RandomAlphanumericProvider().values(0, 20, _rng()).to_pylist()
        assert all(len(value) == 10 and value.isalnum() and value.isascii() for value in values)

    def test_exact_length(self):
        """Test an integer length."""
        provider = RandomAlphanumericProvider.from_config({"name": "s", "length": 4})
        assert {len(v) for v in provider.values(0, 50, _rng()).to_pylist()} == {4}

    def test_length_range(self):
        """Test an inclusive range length."""
        provider = RandomAlphanumericProvider.from_config({"name": "s", "length": "2..4"})
        lengths = {len(v) for v in provider.values(0, 500, _rng()).to_pylist()}
        assert lengths == {2, 3, 4}

    def test_min_max_length_keys(self):
        """Test min_length / max_length parameters."""
        provider = RandomAlphanumericProvider.from_config(
            {"name": "s", "min_length": 0, "max_length": 1}
        )
        lengths = {len(v) for v in provider.values(0, 200, _rng()).to_pylist()}
        assert lengths == {0, 1}

    def test_max_length_only(self):
        """Test that a max_length below the default pulls min_length down with it."""
        provider = RandomAlphanumericProvider.from_config({"name": "s", "max_length": 5})
        assert (provider.min_length, provider.max_length) == (5, 5)
        provider = RandomAlphanumericProvider.from_config({"name": "s", "max_length": 20})
        assert (provider.min_length, provider.max_length) == (10, 20)

    def test_min_length_only(self):
        """Test that a min_length above the default raises max_length with it."""
        provider = RandomAlphanumericProvider.from_config({"name": "s", "min_length": 15})
        assert (provider.min_length, provider.max_length) == (15, 15)

    def test_offsets_are_64_bit(self):
        """Test that tokens are built with 64-bit offsets."""
        array = RandomAlphanumericProvider(3, 3).values(0, 4, _rng())
        assert array.type == pa.large_string()
        offsets = np.frombuffer(array.buffers()[1], dtype=np.int64)
        assert offsets[: len(array) + 1].tolist() == [0, 3, 6, 9, 12]

    def test_zero_length_strings(self):
        """Test that length 0 yields empty strings."""
        provider = RandomAlphanumericProvider(0, 0)
        assert provider.values(0, 3, _rng()).to_pylist() == ["", "", ""]

    @pytest.mark.parametrize("length", ["5..2", -1, "-1..3", "abc", 2.5])
    def test_invalid_lengths(self, length):
        """Test that negative, inverted or malformed lengths are rejected."""
        with pytest.raises(ConfigurationError, match="Column 's'"):
            RandomAlphanumericProvider.from_config({"name": "s", "length": length})

    def test_value_uses_thread_rng(self):
        """Test the scalar path under a seeded thread generator."""
        provider = RandomAlphanumericProvider(6, 6)
        initialize_rng(77)
        first = provider.value(0)
        initialize_rng(77)
        assert provider.value(0) == first
        assert len(first) == 6


class TestStringProviders:
    """Tests for the email and constant providers."""

    def test_email_deterministic(self):
        """Test that the same stream gives the same addresses."""
        provider = RandomEmailProvider()
        first = provider.values(0, 5, _rng(3)).to_pylist()
        second = provider.values(0, 5, _rng(3)).to_pylist()
        assert first == second
        assert all("@" in email for email in first)

    def test_email_unknown_locale(self):
        """Test that an unknown locale is a configuration error."""
        with pytest.raises(ConfigurationError, match="Column 'mail'"):
            RandomEmailProvider.from_config({"name": "mail", "locale": "xx_XX"})

    def test_constant_single_value(self):
        """Test a single constant."""
        provider = ConstantStringProvider.from_config({"name": "c", "data": "fixed"})
        assert provider.values(0, 3, _rng()).to_pylist() == ["fixed"] * 3

    def test_constant_choices(self):
        """Test picking from a list."""
        provider = ConstantStringProvider(["a", "b", "c"])
        assert set(provider.values(0, 300, _rng()).to_pylist()) == {"a", "b", "c"}

    def test_constant_requires_data(self):
        """Test that data is mandatory."""
        with pytest.raises(ConfigurationError, match="missing 'data'"):
            ConstantStringProvider.from_config({"name": "c"})

    def test_constant_rejects_empty_list(self):
        """Test that an empty list is rejected."""
        with pytest.raises(ConfigurationError, match="non-empty list"):
            ConstantStringProvider.from_config({"name": "c", "data": []})


class TestDateProviders:
    """Tests for the date and datetime providers."""

    def test_date_bounds(self):
        """Test that dates fall in [after, before)."""
        provider = RandomDateProvider.from_config(
            {"name": "d", "after": "2020-01-01", "before": "2020-01-04"}
        )
        values = set(provider.values(0, 300, _rng()).to_pylist())
        assert values == {date(2020, 1, 1), date(2020, 1, 2), date(2020, 1, 3)}

    def test_date_defaults(self):
        """Test the default range 1980-01-01 to 2000-01-01."""
        provider = RandomDateProvider.from_config({"name": "d"})
        values = provider.values(0, 100, _rng()).to_pylist()
        assert all(date(1980, 1, 1) <= value < date(2000, 1, 1) for value in values)
        assert provider.format == "%Y-%m-%d"

    def test_date_custom_format(self):
        """Test bounds parsed with a custom format."""
        provider = RandomDateProvider.from_config(
            {"name": "d", "format": "%d/%m/%Y", "after": "01/02/2021", "before": "02/02/2021"}
        )
        assert provider.values(0, 3, _rng()).to_pylist() == [date(2021, 2, 1)] * 3

    def test_date_accepts_yaml_dates(self):
        """Test that already-parsed date objects are accepted as bounds."""
        provider = RandomDateProvider.from_config(
            {"name": "d", "after": date(2000, 1, 1), "before": date(2000, 1, 2)}
        )
        assert provider.values(0, 1, _rng()).to_pylist() == [date(2000, 1, 1)]

    def test_date_bad_format(self):
        """Test that a bound not matching the format is rejected."""
        with pytest.raises(ConfigurationError, match="does not match format"):
            RandomDateProvider.from_config({"name": "d", "after": "2020/01/01"})

    def test_date_after_not_before(self):
        """Test that after >= before is rejected."""
        with pytest.raises(ConfigurationError, match="Column 'd'.*earlier than 'before'"):
            RandomDateProvider.from_config(
                {"name": "d", "after": "2020-01-02", "before": "2020-01-01"}
            )

    def test_datetime_bounds_and_type(self):
        """Test datetime range, second resolution and arrow type."""
        provider = RandomDatetimeProvider.from_config(
            {"name": "t", "after": "2024-01-01 00:00:00", "before": "2024-01-01 00:00:10"}
        )
        array = provider.values(0, 200, _rng())
        assert array.type == pa.timestamp("s")
        values = array.to_pylist()
        assert all(datetime(2024, 1, 1) <= value < datetime(2024, 1, 1, 0, 0, 10) for value in values)

    def test_format_metadata(self):
        """Test that the render format is exposed as field metadata."""
        provider = RandomDatetimeProvider.from_config({"name": "t", "format": "%Y%m%d%H%M%S",
                                                       "after": "20240101000000",
                                                       "before": "20240102000000"})
        assert provider.field_metadata == {FORMAT_METADATA_KEY: b"%Y%m%d%H%M%S"}
