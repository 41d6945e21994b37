"""Services for retailers, agents and terminals."""

from .exceptions import (
    RetailersServiceError,
    RetailerNotFoundError,
    AgentNotFoundError,
    TerminalNotFoundError,
    MissingUserAccountError,
    ShortCodeGenerationError,
)
from .retailers import (
    fetch_retailers,
    fetch_retailer_by_id,
    fetch_my_retailer,
    create_retailer,
    update_retailer,
    update_retailer_balance,
    reset_retailer_password,
)
from .agents import (
    fetch_agents,
    fetch_agent_by_id,
    create_agent,
    update_agent,
    fetch_agent_retailers,
    fetch_unassigned_retailers,
    assign_retailer_to_agent,
    unassign_retailer_from_agent,
)
from .terminals import (
    fetch_terminals,
    fetch_terminal_by_id,
    fetch_my_terminal,
    create_terminal,
    create_terminal_with_user,
    update_terminal,
    reset_terminal_password,
    touch_terminal,
)

__all__ = [
    # Exceptions
    'RetailersServiceError',
    'RetailerNotFoundError',
    'AgentNotFoundError',
    'TerminalNotFoundError',
    'MissingUserAccountError',
    'ShortCodeGenerationError',
    # Retailers
    'fetch_retailers',
    'fetch_retailer_by_id',
    'fetch_my_retailer',
    'create_retailer',
    'update_retailer',
    'update_retailer_balance',
    'reset_retailer_password',
    # Agents
    'fetch_agents',
    'fetch_agent_by_id',
    'create_agent',
    'update_agent',
    'fetch_agent_retailers',
    'fetch_unassigned_retailers',
    'assign_retailer_to_agent',
    'unassign_retailer_from_agent',
    # Terminals
    'fetch_terminals',
    'fetch_terminal_by_id',
    'fetch_my_terminal',
    'create_terminal',
    'create_terminal_with_user',
    'update_terminal',
    'reset_terminal_password',
    'touch_terminal',
]
