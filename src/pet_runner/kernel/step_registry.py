from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from pet_runner.domain.literals import LiteralScalar, MalformedLiteral, coerce_literal
from pet_runner.kernel.errors import RegistryFrozenError
from pet_runner.kernel.pattern import CompiledPattern, compile_pattern
from pet_runner.kernel.scenario import StepHandler


@dataclass(frozen=True, slots=True)
class StepDefinition:
    description: str
    matcher: CompiledPattern
    handler: StepHandler


@dataclass(frozen=True, slots=True)
class Found:
    # Line matched a definition; args are already coerced (possibly empty).
    definition: StepDefinition
    args: tuple[LiteralScalar, ...]


@dataclass(frozen=True, slots=True)
class NotFound:
    line: str


StepResolution = Found | NotFound | MalformedLiteral


@dataclass
class StepRegistry:
    """Ordered collection of step definitions.

    Lifecycle: construct, populate with :meth:`register` / :meth:`step`,
    :meth:`freeze`, then hand to the parser. Resolution is first-match-wins in
    registration order; overlapping patterns are not detected.
    """

    _definitions: list[StepDefinition] = field(default_factory=list)
    _frozen: bool = False

    def register(self, description: str, handler: StepHandler) -> StepDefinition:
        if self._frozen:
            raise RegistryFrozenError(f"Cannot register step after freeze: {description}")
        definition = StepDefinition(
            description=description,
            matcher=compile_pattern(description),
            handler=handler,
        )
        self._definitions.append(definition)
        return definition

    def step(self, description: str) -> Callable[[StepHandler], StepHandler]:
        # Decorator form of register(); returns the handler unchanged.
        def _decorate(handler: StepHandler) -> StepHandler:
            self.register(description, handler)
            return handler

        return _decorate

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def definitions(self) -> tuple[StepDefinition, ...]:
        return tuple(self._definitions)

    def __len__(self) -> int:
        return len(self._definitions)

    def resolve(self, line: str) -> StepResolution:
        for definition in self._definitions:
            tokens = definition.matcher.match(line)
            if tokens is None:
                continue
            args: list[LiteralScalar] = []
            for token in tokens:
                coerced = coerce_literal(token)
                if isinstance(coerced, MalformedLiteral):
                    return coerced
                args.append(coerced.value)
            return Found(definition=definition, args=tuple(args))
        return NotFound(line=line)
