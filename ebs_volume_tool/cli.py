"""CLI entry point for ebs-volume-tool.

Note: This code was generated with assistance from AI coding tools
and has been reviewed and tested by a human.
"""

import click

from ebs_volume_tool.ebs.commands.address_commands import associate_command
from ebs_volume_tool.ebs.commands.attach_commands import attach_command
from ebs_volume_tool.ebs.commands.detach_commands import detach_command
from ebs_volume_tool.ebs.commands.volume_commands import (
    snapshot_command,
    snapshot_delete_command,
    volumes_command,
)
from ebs_volume_tool.ebs.constants import DEFAULT_CLI_ENDPOINT


@click.group()
@click.version_option(version="0.1.0")
@click.option(
    "--endpoint",
    envvar="EBS_ENDPOINT",
    default=DEFAULT_CLI_ENDPOINT,
    show_default=True,
    help="The AWS EC2 endpoint to use",
)
@click.option("--region", envvar="AWS_REGION", help="AWS region used for signing")
@click.option("--profile", envvar="AWS_PROFILE", help="AWS profile")
@click.pass_context
def main(ctx: click.Context, endpoint: str, region: str | None, profile: str | None) -> None:
    """Attach, detach and snapshot EBS volumes from automation"""
    ctx.obj = {"endpoint": endpoint, "region": region, "profile": profile}


@main.group("ebs")
def ebs() -> None:
    """Elastic Block Store volumes and snapshots"""
    pass


@main.group("eip")
def eip() -> None:
    """Elastic IP addresses"""
    pass


# Register volume lifecycle commands
ebs.add_command(attach_command)
ebs.add_command(detach_command)

# Register inspection commands
ebs.add_command(volumes_command)
ebs.add_command(snapshot_command)
ebs.add_command(snapshot_delete_command)

# Register address commands
eip.add_command(associate_command)

if __name__ == "__main__":
    main()
