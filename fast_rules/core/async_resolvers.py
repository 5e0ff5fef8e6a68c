from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Dict

if TYPE_CHECKING:
    from fast_rules.core.rules import Rule


class AsyncResolvers:
    """
    Join over an unknown-at-start number of rule evaluations.

    Each evaluation takes a slot via `add` before its predicate is invoked and
    gives it back via `resolve`. Failed slots are reported to `on_failed_one`
    as they resolve. `on_resolved_all(all_passed)` runs exactly once, after
    `enable_firing` was called and every slot has resolved.

    Firing stays disarmed while directives are still being scheduled, so rules
    that resolve inline cannot make the run look complete too early.

    Usage:
        resolvers = AsyncResolvers(on_failed_one, on_resolved_all)
        index = resolvers.add(rule)
        rule.validate(value, args, attribute, lambda: resolvers.resolve(index))
        resolvers.enable_firing()
        resolvers.fire()
    """

    def __init__(self, on_failed_one: Callable[['Rule'], None], on_resolved_all: Callable[[bool], None]) -> None:
        self.on_failed_one = on_failed_one
        self.on_resolved_all = on_resolved_all
        self.resolvers: Dict[int, 'Rule'] = {}
        self.resolved: Dict[int, bool] = {}
        self.resolvers_count = 0
        self.passed: list['Rule'] = []
        self.failed: list['Rule'] = []
        self.firing = False
        self.fired = False

    def add(self, rule: 'Rule') -> int:
        index = self.resolvers_count
        self.resolvers[index] = rule
        self.resolved[index] = False
        self.resolvers_count += 1
        return index

    def resolve(self, index: int) -> None:
        if self.resolved.get(index, True):
            logging.warning(f"[ASYNC RESOLVERS] Slot {index} resolved more than once or never added, ignoring")
            return
        self.resolved[index] = True

        rule = self.resolvers[index]
        if rule.passes:
            self.passed.append(rule)
        else:
            self.failed.append(rule)
            self.on_failed_one(rule)

        self.fire()

    def is_all_resolved(self) -> bool:
        return len(self.passed) + len(self.failed) == self.resolvers_count

    def enable_firing(self) -> None:
        self.firing = True

    def fire(self) -> None:
        if not self.firing or self.fired:
            return
        if self.is_all_resolved():
            self.fired = True
            logging.debug(
                f"[ASYNC RESOLVERS] All {self.resolvers_count} slot(s) resolved, {len(self.failed)} failed"
            )
            self.on_resolved_all(len(self.failed) == 0)
