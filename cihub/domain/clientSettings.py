from dataclasses import dataclass


@dataclass
class ClientSettings:
    base_url: str = "http://localhost:8080"
    estimate_path: str = "/api/estimate"
    health_path: str = "/healthz"
    timeout: float = 10.0
    history_dir: str = ".cihub"
    history_key: str = "cihub_history_v1"  # bump the suffix when HistoryEntry changes shape


"""
{
  "base_url": "http://localhost:8080",
  "timeout": 5,
  "history_dir": "~/.cihub"
}
"""
