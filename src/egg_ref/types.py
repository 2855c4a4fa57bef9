from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional
from typing_extensions import TypeAlias, TypeGuard
from .tree import Meta, Node

# ---------- Value Model ----------

@dataclass
class EggBool:
    value: bool
    def __repr__(self) -> str:
        return "true" if self.value else "false"

@dataclass
class EggNumber:
    value: float
    def __repr__(self) -> str:
        v = float(self.value)
        # Past 1e21 integral floats print in exponent form.
        if v.is_integer() and abs(v) < 1e21:
            return str(int(v))
        return repr(v)

@dataclass
class EggString:
    value: str
    def __repr__(self) -> str:
        return f'"{self.value}"'

@dataclass(eq=False)
class EggArray:
    items: List['EggValue']
    def __repr__(self) -> str:
        return "[" + ", ".join(repr(x) for x in self.items) + "]"

@dataclass(eq=False)
class EggFn:
    params: List[str]
    body: Node                    # AST node
    env: 'Environment'            # captured by reference, never copied

    @property
    def arity(self) -> int:
        return len(self.params)

    def __repr__(self) -> str:
        param_desc = ", ".join(self.params) if self.params else "nullary"
        return f"<fun params={param_desc} body={type(self.body).__name__}>"

BuiltinFn = Callable[[List['EggValue']], 'EggValue']

@dataclass(frozen=True, eq=False)
class Builtin:
    name: str
    fn: BuiltinFn
    arity: Optional[int] = None   # None: any number of arguments
    def __repr__(self) -> str:
        return f"<builtin {self.name}>"

EggValue: TypeAlias = (
    EggBool
    | EggNumber
    | EggString
    | EggArray
    | EggFn
    | Builtin
)

def is_callable(value: object) -> TypeGuard[EggFn | Builtin]:
    return isinstance(value, (EggFn, Builtin))

# ---------- Exceptions ----------

class EggError(Exception):
    """Base for every error the interpreter raises on behalf of Egg code."""
    meta: Optional[Meta]

    def __init__(self, message: str, meta: Optional[Meta] = None):
        super().__init__(message)
        self.message = message
        self.meta = meta

    @property
    def line(self) -> Optional[int]:
        return self.meta.line if self.meta is not None else None

    @property
    def column(self) -> Optional[int]:
        return self.meta.column if self.meta is not None else None

    def __str__(self) -> str:
        if self.meta is None:
            return self.message

        return f"{self.message} (line {self.meta.line}, col {self.meta.column})"

class EggSyntaxError(EggError):
    """Malformed source text or malformed special-form shape."""

    def __init__(self, message: str, meta: Optional[Meta] = None, rest: Optional[str] = None):
        super().__init__(message, meta)
        self.rest = rest

class EggRuntimeError(EggError):
    pass

class EggReferenceError(EggRuntimeError):
    def __init__(self, message: str, name: str):
        super().__init__(f"{message}: {name}")
        self.name = name

class EggTypeError(EggRuntimeError):
    pass

class EggIndexError(EggRuntimeError):
    pass

# ---------- Environment ----------

class Environment:
    """One lexical scope plus a link to the enclosing one.

    Children share their parent; nothing here ever copies a scope.
    """

    def __init__(self, parent: Optional['Environment'] = None, bindings: Optional[Dict[str, EggValue]] = None):
        self.parent = parent
        self.vars: Dict[str, EggValue] = dict(bindings) if bindings else {}

    def child(self) -> 'Environment':
        return Environment(parent=self)

    def define(self, name: str, val: EggValue) -> None:
        self.vars[name] = val

    def lookup(self, name: str) -> EggValue:
        scope: Optional[Environment] = self

        while scope is not None:
            if name in scope.vars:
                return scope.vars[name]
            scope = scope.parent

        raise EggReferenceError("undefined variable", name)

    def assign(self, name: str, val: EggValue) -> None:
        owner = self.owner_of(name)

        if owner is None:
            raise EggReferenceError("assigning undefined variable", name)

        owner.vars[name] = val

    def owner_of(self, name: str) -> Optional['Environment']:
        """Nearest scope in the chain that binds *name* itself."""
        scope: Optional[Environment] = self

        while scope is not None:
            if name in scope.vars:
                return scope
            scope = scope.parent

        return None

    def __contains__(self, name: str) -> bool:
        return self.owner_of(name) is not None

    def __repr__(self) -> str:
        depth = 0
        scope = self.parent
        while scope is not None:
            depth += 1
            scope = scope.parent
        return f"<Environment depth={depth} names={sorted(self.vars)}>"
