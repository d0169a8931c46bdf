"""Docker container model and name resolution"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from .exceptions import NotFoundError


class ContainerState(Enum):
    RUNNING = 'running'
    PAUSED = 'paused'
    EXITED = 'exited'
    OTHER = 'other'


@dataclass
class ContainerPort:
    ip: Optional[str] = None
    private_port: Optional[int] = None
    public_port: Optional[int] = None
    type: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ContainerPort':
        return cls(
            ip=data.get('ip'),
            private_port=data.get('privatePort'),
            public_port=data.get('publicPort'),
            type=data.get('type')
        )

    def __str__(self) -> str:
        proto = (self.type or 'tcp').lower()
        if self.public_port:
            host = f"{self.ip}:" if self.ip else ''
            return f"{host}{self.public_port}->{self.private_port}/{proto}"
        return f"{self.private_port}/{proto}"


@dataclass
class Container:
    """A container as reported by the server"""
    id: str
    names: List[str] = field(default_factory=list)
    image: str = ''
    state: ContainerState = ContainerState.OTHER
    raw_state: str = ''
    status: str = ''
    ports: List[ContainerPort] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Container':
        raw_state = (data.get('state') or '').lower()
        try:
            state = ContainerState(raw_state)
        except ValueError:
            state = ContainerState.OTHER

        return cls(
            id=data['id'],
            names=list(data.get('names') or []),
            image=data.get('image') or '',
            state=state,
            raw_state=raw_state,
            status=data.get('status') or '',
            ports=[ContainerPort.from_dict(p) for p in data.get('ports') or []]
        )

    @property
    def state_name(self) -> str:
        """State as displayed; unknown states keep the server's wording"""
        if self.state is ContainerState.OTHER:
            return self.raw_state
        return self.state.value

    @property
    def display_name(self) -> str:
        if not self.names:
            return 'unnamed'
        return strip_separator(self.names[0])

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'names': [strip_separator(n) for n in self.names],
            'image': self.image,
            'state': self.state_name,
            'status': self.status,
            'ports': [str(p) for p in self.ports],
        }


def strip_separator(name: str) -> str:
    """Strip the leading '/' Docker puts in front of container names"""
    return name.lstrip('/')


def resolve_container_id(containers: List[Container], name: str) -> str:
    """Find the id of the first container with an alias matching name"""
    wanted = name.lower()
    for container in containers:
        for alias in container.names:
            if strip_separator(alias).lower() == wanted:
                return container.id

    raise NotFoundError('Container', name)


def filter_containers(containers: List[Container], show_all: bool = False) -> List[Container]:
    if show_all:
        return list(containers)
    return [c for c in containers if c.state is ContainerState.RUNNING]


def truncate(text: str, max_len: int) -> str:
    """Truncate text to max_len characters, marking the cut with '...'"""
    if len(text) <= max_len:
        return text
    return f"{text[:max_len - 3]}..."
