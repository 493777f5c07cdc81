"""
estimate-spine: keep GitHub project board estimates in line with Size and Risk.

- estimate_spine.core: errors, results, logging, settings
- estimate_spine.domain: Size/Risk codes, cost model, run models
- estimate_spine.transport: GraphQL over httpx
- estimate_spine.gateway: Projects V2 board access
- estimate_spine.engine: the reconciliation run
- estimate_spine.cli: the ``estimate-spine`` command
"""

__version__ = "0.1.0"
