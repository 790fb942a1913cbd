import argparse

import uvicorn


def parse_args():
    parser = argparse.ArgumentParser(description="Run the inventory API server.")
    parser.add_argument("--host", default="127.0.0.1", help="Bind address.")
    parser.add_argument("--port", type=int, default=8000, help="Bind port.")
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Restart the server when source files change.",
    )
    return parser.parse_args()


def main():
    args = parse_args()
    uvicorn.run("inventory_api.main:app", host=args.host, port=args.port, reload=args.reload)


if __name__ == "__main__":
    main()
