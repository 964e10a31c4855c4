"""Shared configuration, entities, metrics, messaging, discovery, RPC and HTTP helpers."""