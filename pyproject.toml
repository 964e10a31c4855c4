[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gorder"
version = "0.1.0"
description = "Order, stock and payment services for a small ordering system, wired together with JSON RPC, RabbitMQ and Consul"
requires-python = ">=3.10"
keywords = ["orders", "stock", "payment", "microservices", "rabbitmq", "consul", "cqrs"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Framework :: Flask",
    "Topic :: Office/Business",
]
dependencies = [
    "flask",
    "pyyaml",
    "requests",
    "pika",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["gorder"]

[tool.pytest.ini_options]
addopts = "-ra"
