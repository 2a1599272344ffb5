"""Value providers. Importing this package registers every provider type."""

from synth_lake.python_libs.generation.providers.base_provider import (
    ValueProvider,
    get_registered_providers,
)
from synth_lake.python_libs.generation.providers.increment import IncrementIntegerProvider
from synth_lake.python_libs.generation.providers.random_bool import RandomBoolProvider
from synth_lake.python_libs.generation.providers.random_date import (
    RandomDateProvider,
    RandomDatetimeProvider,
)
from synth_lake.python_libs.generation.providers.random_number import (
    RandomF64Provider,
    RandomI32Provider,
    RandomI64Provider,
)
from synth_lake.python_libs.generation.providers.random_string import (
    ConstantStringProvider,
    RandomAlphanumericProvider,
    RandomEmailProvider,
)

__all__ = [
    "ValueProvider",
    "get_registered_providers",
    "IncrementIntegerProvider",
    "RandomBoolProvider",
    "RandomI32Provider",
    "RandomI64Provider",
    "RandomF64Provider",
    "RandomAlphanumericProvider",
    "RandomEmailProvider",
    "ConstantStringProvider",
    "RandomDateProvider",
    "RandomDatetimeProvider",
]
