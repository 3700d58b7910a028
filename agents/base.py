from abc import ABC, abstractmethod
from typing import Any


class BaseAgent(ABC):
    """
    Base interface for agents in the pillar architect.

    Agents should be stateless: every run builds its output from its input
    and whatever the backend returns for that one call.
    """

    name: str

    @abstractmethod
    def run(self, input: Any) -> Any:
        """
        Execute the agent.

        Args:
            input: Agent-specific input (a topic string, a schema instance, ...).

        Returns:
            Agent-specific output, typically a schema instance.
        """
        raise NotImplementedError
