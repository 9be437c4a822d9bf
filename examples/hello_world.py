#!/usr/bin/env python3
"""edgelet-docker — Hello World example.

This script walks one module through its whole lifecycle on a local engine:

  1. Pull the image
  2. Create the module on the configured network
  3. Start it and read its state
  4. List the modules owned by the agent
  5. Stop and remove it

Prerequisites:
  - A running Docker engine reachable at ``--url``
  - ``pip install -e .``

Usage:
  python examples/hello_world.py
  python examples/hello_world.py --url tcp://192.168.1.10:2375 --network azure-iot-edge
"""

from __future__ import annotations

import argparse
import asyncio


async def run(url: str, network: str | None, image: str) -> None:
    from edgelet_docker import DockerConfig, DockerModuleRuntime, ModuleSpec

    runtime = DockerModuleRuntime.build(url, network_id=network)
    async with runtime:
        print(f"Pulling {image}...")
        await runtime.registry().pull(image)

        spec = ModuleSpec(
            name="hello-module",
            module_type="docker",
            config=DockerConfig(image, {"Cmd": ["sleep", "300"]}),
            env={"GREETING": "hello"},
        )
        await runtime.create(spec)
        await runtime.start(spec.name)

        for module in await runtime.list():
            state = await module.runtime_state()
            print(f"  {module.name:<20} {module.config.image:<30} {state.status.value}")

        await runtime.stop(spec.name)
        await runtime.remove(spec.name)
        print("Done.")


def main() -> None:
    parser = argparse.ArgumentParser(description="edgelet-docker Hello World")
    parser.add_argument("--url", default="unix:///var/run/docker.sock", help="Engine endpoint")
    parser.add_argument("--network", default=None, help="Network to attach the module to")
    parser.add_argument("--image", default="busybox:latest", help="Image to run")
    args = parser.parse_args()

    from edgelet_docker.logging import configure_logging

    configure_logging(level="info")
    asyncio.run(run(args.url, args.network, args.image))


if __name__ == "__main__":
    main()
