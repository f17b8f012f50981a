# Volume provisioning example

import asyncio
import sys

from ifs_volumes import (
    ClientConfig,
    HttpTransport,
    NotFoundError,
    PartialCreationError,
    VolumeService,
)
from ifs_volumes.utils import configure_logging


async def main(name: str):
    # IFS_ENDPOINT, IFS_USER, IFS_PASSWORD, ... from the environment
    config = ClientConfig.from_env()
    configure_logging(config.log_level)

    async with HttpTransport(config) as transport:
        service = VolumeService(transport, config)

        try:
            result = await service.create(name)
            print(f"✓ Volume created: {result.path}")
        except PartialCreationError as e:
            print(f"! Volume {e.volume_name} exists but ownership failed: {e.cause}")
            print("  Retrying ownership assignment once")
            await service.set_ownership(name)

        attributes = await service.get(name)
        print(f"  Owner: {attributes.owner}")

        copy_name = f"{name}-copy"
        await service.copy(name, copy_name)
        print(f"✓ Volume copied: {copy_name}")

        listing = await service.list()
        print(f"  Volumes: {', '.join(listing.names)}")

        for volume in (copy_name, name):
            try:
                await service.delete(volume)
            except NotFoundError:
                print(f"  Volume already gone: {volume}")
            else:
                print(f"✓ Volume deleted: {volume}")


if __name__ == "__main__":
    asyncio.run(main(sys.argv[1] if len(sys.argv) > 1 else "demo-volume"))
