"""
Graph runner — thin sugar over nodnod.

    from storefront._graph import node, compose

    @node
    class SubtotalNode:
        def __init__(self, amount: Decimal) -> None:
            self.amount = amount

        @classmethod
        def __compose__(cls, lines: LinesNode) -> "SubtotalNode":
            return cls(C.subtotal(lines.items))

    subtotal = await compose(SubtotalNode, quote_input)

Inputs are injected under their runtime type, so a node asks for one by
annotating a __compose__ parameter with that type.
"""

from __future__ import annotations

from collections.abc import Callable, Coroutine
from typing import Any, cast

from nodnod import EventLoopAgent, Node, Scope, Value
from nodnod import scalar_node as node


async def compose[T](target: type[T], *inputs: object) -> T:
    """
    Build the dependency graph of target, inject inputs, run it once.

    Every call gets a fresh scope: nothing is shared between requests.
    """
    agent = EventLoopAgent.build({cast(type[Node[Any, Any]], target)})

    scope = Scope(detail="storefront")
    async with scope:
        for value in inputs:
            scope.push(Value(cast(type[Any], type(value)), value))

        run = cast(
            Callable[[Scope, dict[type[Any], Scope]], Coroutine[Any, Any, None]],
            getattr(agent, "run"),
        )
        await run(scope, {})

        result = scope.get(target)
        if result is None:
            raise KeyError(f"{target.__name__} was not produced")
        return cast(T, result.value)


__all__ = ("node", "compose")
