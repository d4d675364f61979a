# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

"""Quickstart: Drive a container through its lifecycle.

Connects to the local engine, creates a container from a small image,
starts it, pauses and unpauses it, inspects it and stops it again.
The image must already be present locally.

Usage:
    python examples/quickstart_lifecycle.py [IMAGE]
"""

import sys

from dock_wire import EngineClient
from dock_wire.api import containers, system
from dock_wire.errors import ContainerStateUnchanged


def main() -> None:
    image = sys.argv[1] if len(sys.argv) > 1 else "busybox"

    with EngineClient.connect(timeout=10) as client:
        print(f"Engine replied {system.ping(client)}")

        created = containers.create_container_minimal(
            client, "dock-wire-quickstart", image, ["sleep", "60"]
        )
        print(f"Created {created.id[:12]}")

        print(containers.start_container(client, created.id))
        print(containers.pause_container(client, created.id))
        print(containers.unpause_container(client, created.id))

        details = containers.inspect_container(client, created.id)
        print(f"{details.name}: {details.state.status} (pid {details.state.pid})")

        try:
            print(containers.start_container(client, created.id))
        except ContainerStateUnchanged:
            print("Already running.")

        print(containers.stop_container(client, created.id, delay=1))


if __name__ == "__main__":
    main()
