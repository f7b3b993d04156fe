"""Remote data gateways."""

from storefront.providers.remote_gateway import RemoteDataGateway, SearchQuery
from storefront.providers.http_gateway import HttpRemoteDataGateway
from storefront.providers.stub_provider import StubRemoteDataGateway

__all__ = [
    "RemoteDataGateway",
    "SearchQuery",
    "HttpRemoteDataGateway",
    "StubRemoteDataGateway",
]
