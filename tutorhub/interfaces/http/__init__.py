"""HTTP interface: routers, dependencies and response serializers."""
