from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Dict, List, Optional, Union


class TokenKind(Enum):
    IDENTIFIER = "identifier"
    VARIABLE = "variable"
    STRING = "string"
    INTERPOLATED_STRING = "interpolated_string"
    OPEN_PAREN = "open_paren"
    CLOSE_PAREN = "close_paren"
    OPEN_BRACKET = "open_bracket"
    CLOSE_BRACKET = "close_bracket"
    COMMA = "comma"
    CONCAT = "concat"
    OBJECT_OPERATOR = "object_operator"
    STATIC_OPERATOR = "static_operator"
    NS_SEPARATOR = "ns_separator"
    COMMENT = "comment"
    OTHER = "other"


class CallCategory(Enum):
    ACTION = "action"
    FILTER = "filter"
    ROUTE = "rest_route"
    TAG = "shortcode"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str
    line: int
    # unquoted literal for STRING, leading literal segment for INTERPOLATED_STRING
    value: Optional[str] = None


@dataclass
class CallSite:
    function_name: str
    category: CallCategory
    arg_token_groups: List[List[Token]]
    line: int


@dataclass
class HookDiscovery:
    hook_name: str
    is_dynamic: bool
    file: str
    line: int
    param_count: int
    hook_type: str = CallCategory.ACTION.value
    occurrence_count: int = 1

    def to_dict(self):
        return {
            "hook_name": self.hook_name,
            "file": self.file,
            "line": self.line,
            "param_count": self.param_count,
            "dynamic": self.is_dynamic,
            "count": self.occurrence_count,
        }


@dataclass
class RouteDiscovery:
    namespace: str
    route_pattern: str
    full_route: str
    file: str
    line: int

    def to_dict(self):
        return {
            "namespace": self.namespace,
            "route": self.route_pattern,
            "full_route": self.full_route,
            "file": self.file,
            "line": self.line,
        }


@dataclass
class TagDiscovery:
    tag: str
    file: str
    line: int

    def to_dict(self):
        return asdict(self)


Discovery = Union[HookDiscovery, RouteDiscovery, TagDiscovery]


@dataclass
class PotentialAbility:
    suggested_name: str
    label: str
    ability_type: str
    confidence: str
    score: int
    source_type: str
    source: Discovery

    def to_dict(self):
        return {
            "suggested_name": self.suggested_name,
            "label": self.label,
            "ability_type": self.ability_type,
            "confidence": self.confidence,
            "score": self.score,
            "source_type": self.source_type,
            "source": self.source.to_dict(),
        }


@dataclass
class ScanStats:
    files_scanned: int = 0
    files_errored: int = 0
    total_files: int = 0
    truncated: bool = False
    total_hooks: int = 0
    total_routes: int = 0
    total_shortcodes: int = 0
    potential_abilities_count: int = 0
    scan_time_ms: float = 0.0

    def to_dict(self):
        return asdict(self)


@dataclass
class ScanResult:
    potential_abilities: List[PotentialAbility] = field(default_factory=list)
    hooks_by_category: Dict[str, List[HookDiscovery]] = field(
        default_factory=lambda: {CallCategory.ACTION.value: [], CallCategory.FILTER.value: []}
    )
    routes: List[RouteDiscovery] = field(default_factory=list)
    tags: List[TagDiscovery] = field(default_factory=list)
    stats: ScanStats = field(default_factory=ScanStats)

    @property
    def actions(self) -> List[HookDiscovery]:
        return self.hooks_by_category[CallCategory.ACTION.value]

    @property
    def filters(self) -> List[HookDiscovery]:
        return self.hooks_by_category[CallCategory.FILTER.value]

    def to_dict(self):
        return {
            "potential_abilities": [a.to_dict() for a in self.potential_abilities],
            "actions": [h.to_dict() for h in self.actions],
            "filters": [h.to_dict() for h in self.filters],
            "rest_routes": [r.to_dict() for r in self.routes],
            "shortcodes": [t.to_dict() for t in self.tags],
            "stats": self.stats.to_dict(),
        }
