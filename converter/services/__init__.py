"""Service layer modules."""

from .coordinator import ConverterCoordinator
from .fx_conversion import convert, find_rate, normalize_currency
from .mapper import MappingError, to_currency_code_list, to_exchange_rates
from .repository import ExchangeRateRepository, get_repository, init_repository
from .result import Err, FailureKind, Ok, Result
