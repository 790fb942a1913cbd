from inventory_api.application import create_app

app = create_app()


__all__ = ["app"]
