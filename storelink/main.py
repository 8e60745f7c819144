#!/usr/bin/env python3
"""
storelink command line entry point
"""
import asyncio

import click
from loguru import logger

from storelink.api.security import JwtTokenGenerator
from storelink.config import settings
from storelink.marketplaces.ricardo import RicardoApiClient


@click.group()
def cli():
    """storelink CLI"""
    pass


@cli.command()
def serve():
    """Run the API server"""
    from storelink.api.main import run

    run()


@cli.command("ricardo-test")
def ricardo_test():
    """Check the ricardo.ch credentials by authenticating once"""
    config = settings.ricardo
    if not config.has_credentials():
        logger.error("Please configure all required credentials first")
        raise SystemExit(1)

    async def _authenticate() -> bool:
        client = RicardoApiClient(config)
        try:
            return await client.authenticate()
        finally:
            await client.close()

    if not asyncio.run(_authenticate()):
        logger.error("ricardo.ch authentication failed")
        raise SystemExit(1)

    logger.info(f"ricardo.ch authentication succeeded ({'sandbox' if config.use_sandbox else 'production'})")


@cli.command("create-token")
@click.option("--email", required=True, help="Email claim of the token")
@click.option("--customer-id", required=True, help="CustomerId claim of the token")
@click.option("--frontend", is_flag=True, help="Sign with the frontend (customer) key instead of the backend key")
def create_token(email: str, customer_id: str, frontend: bool):
    """Sign a token locally, for development"""
    config = settings.frontend_api if frontend else settings.backend_api
    token = JwtTokenGenerator(config).generate_token({"Email": email, "CustomerId": customer_id})
    click.echo(token)


if __name__ == "__main__":
    cli()
