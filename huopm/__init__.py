"""huopm – High Utility Occupancy Pattern Mining."""

from .exceptions import (
    DuplicateItem,
    HUOPMError,
    InvalidProfit,
    InvalidQuantity,
    InvalidThreshold,
    MiningCancelled,
)
from .model import BaseModel, Miner
from .occupancy import itemset_occupancy, itemset_occupancy_in_transaction
from .search import HUOPM, Pattern, huopm, mine_huopm
from .transactions import Transaction, as_profit_table, from_long_format, parse_database
from .twu import TidsetIndex, compute_twu, itemset_twu
from .utility import item_utility, itemset_utility, itemset_utility_in_transaction, transaction_utility

__all__ = [
    "huopm",
    "HUOPM",
    "mine_huopm",
    "Pattern",
    "BaseModel",
    "Miner",
    "Transaction",
    "parse_database",
    "from_long_format",
    "as_profit_table",
    "item_utility",
    "transaction_utility",
    "itemset_utility_in_transaction",
    "itemset_utility",
    "itemset_occupancy_in_transaction",
    "itemset_occupancy",
    "compute_twu",
    "itemset_twu",
    "TidsetIndex",
    "HUOPMError",
    "InvalidQuantity",
    "DuplicateItem",
    "InvalidProfit",
    "InvalidThreshold",
    "MiningCancelled",
]
