"""Service registration and discovery through Consul."""

from __future__ import annotations

import logging
import random
import threading
import time
from abc import ABC, abstractmethod
from typing import Callable

import requests

log = logging.getLogger(__name__)

_registry: "ConsulRegistry | None" = None
_registry_lock = threading.Lock()


class Registry(ABC):
    @abstractmethod
    def register(self, instance_id, service_name, host_port): ...

    @abstractmethod
    def deregister(self, instance_id, service_name): ...

    @abstractmethod
    def discover(self, service_name): ...

    @abstractmethod
    def health_check(self, instance_id, service_name): ...


class ConsulRegistry(Registry):
    """Registry backed by the Consul agent HTTP API."""

    def __init__(self, address: str = "", session=None, timeout: float = 5.0):
        address = address or "127.0.0.1:8500"
        self.base_url = address if "://" in address else f"http://{address}"
        self._session = session or requests.Session()
        self._timeout = timeout

    def _put(self, path: str, payload=None):
        resp = self._session.put(self.base_url + path, json=payload, timeout=self._timeout)
        resp.raise_for_status()
        return resp

    def register(self, instance_id: str, service_name: str, host_port: str) -> None:
        parts = host_port.split(":")
        if len(parts) != 2:
            raise ValueError("invalid host port")
        host, port_text = parts
        try:
            port = int(port_text)
        except ValueError:
            port = 0
        self._put("/v1/agent/service/register", {
            "ID": instance_id,
            "Name": service_name,
            "Address": host,
            "Port": port,
            "Check": {
                "CheckID": instance_id,
                "TLSSkipVerify": False,
                "TTL": "5s",
                "Timeout": "5s",
                "DeregisterCriticalServiceAfter": "10s",
            },
        })

    def deregister(self, instance_id: str, service_name: str) -> None:
        log.info("deregister from consul",
                 extra={"fields": {"instanceID": instance_id, "serviceName": service_name}})
        self._put(f"/v1/agent/service/deregister/{instance_id}")

    def discover(self, service_name: str) -> list[str]:
        resp = self._session.get(f"{self.base_url}/v1/health/service/{service_name}",
                                 params={"passing": "1"}, timeout=self._timeout)
        resp.raise_for_status()
        return [f"{e['Service']['Address']}:{e['Service']['Port']}" for e in resp.json() or []]

    def health_check(self, instance_id: str, service_name: str) -> None:
        self._put(f"/v1/agent/check/update/{instance_id}",
                  {"Status": "passing", "Output": "online"})


def generate_instance_id(service_name: str) -> str:
    return f"{service_name}-{random.randrange(2 ** 63)}"


def get_registry(consul_addr: str) -> ConsulRegistry:
    """Return the process-wide registry, created on first use."""
    global _registry
    with _registry_lock:
        if _registry is None:
            _registry = ConsulRegistry(consul_addr)
        return _registry


def register_to_consul(config, service_name: str) -> Callable[[], None]:
    """Register the service, keep its TTL check alive, return a deregister callable."""
    registry = get_registry(config.get_string("consul.addr"))
    instance_id = generate_instance_id(service_name)
    grpc_addr = config.sub(service_name).get_string("grpc-addr")
    registry.register(instance_id, service_name, grpc_addr)
    stop = threading.Event()

    def heartbeat() -> None:
        while not stop.is_set():
            try:
                registry.health_check(instance_id, service_name)
            except Exception as err:
                log.critical("no heartbeat from %s to registry, err=%s", service_name, err)
                return
            stop.wait(1.0)

    threading.Thread(target=heartbeat, daemon=True).start()
    log.info("registered to consul",
             extra={"fields": {"serviceName": service_name, "addr": grpc_addr}})

    def deregister() -> None:
        stop.set()
        registry.deregister(instance_id, service_name)

    return deregister


def get_service_addr(config, service_name: str) -> str:
    """Pick a random healthy address of the service."""
    registry = get_registry(config.get_string("consul.addr"))
    addrs = registry.discover(service_name)
    if not addrs:
        raise LookupError(f"got empty {service_name} addrs from consul")
    log.info("Discovered %d instance of %s, addrs=%s", len(addrs), service_name, addrs)
    return random.choice(addrs)