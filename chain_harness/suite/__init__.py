from chain_harness.suite.config import SuiteConfig
from chain_harness.suite.executor import determine_status, execute_scenario

__all__ = [
    "SuiteConfig",
    "determine_status",
    "execute_scenario",
]
