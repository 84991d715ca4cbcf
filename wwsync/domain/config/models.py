"""
Sync configuration models (~/.wwsync)
"""
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List


@dataclass
class Mapping:
    """Local folder -> remote folder with rsync exclusions"""
    local: str
    remote: str
    excludes: List[str] = field(default_factory=list)
    
    def to_dict(self) -> Dict[str, Any]:
        return {
            "local": self.local,
            "remote": self.remote,
            "excludes": list(self.excludes),
        }
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Mapping":
        return cls(
            local=data["local"],
            remote=data["remote"],
            excludes=list(data.get("excludes", [])),
        )


@dataclass
class ServerConfig:
    """One server alias"""
    host: str
    shell: Optional[str] = None
    mappings: List[Mapping] = field(default_factory=list)
    
    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"host": self.host}
        if self.shell:
            data["shell"] = self.shell
        data["mappings"] = [m.to_dict() for m in self.mappings]
        return data
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ServerConfig":
        return cls(
            host=data["host"],
            shell=data.get("shell"),
            mappings=[Mapping.from_dict(m) for m in data.get("mappings", [])],
        )


@dataclass
class WWConfig:
    """Whole configuration file"""
    servers: Dict[str, ServerConfig] = field(default_factory=dict)
    
    def to_dict(self) -> Dict[str, Any]:
        return {"servers": {name: s.to_dict() for name, s in self.servers.items()}}
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WWConfig":
        return cls(
            servers={
                name: ServerConfig.from_dict(s)
                for name, s in data.get("servers", {}).items()
            }
        )
