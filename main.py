import argparse

from bracketform import Runner, __version__


def parse_args() -> argparse.Namespace:
    """Parse cmdline arguments"""
    parser = argparse.ArgumentParser(
        description="Encode JSON parameters as a URL-encoded form",
        usage="%(prog)s [options]",
    )

    parser.add_argument(
        "--paramsfile", help="JSON file holding the parameters", required=True
    )

    parser.add_argument("--configfile", help="JSON config file")

    parser.add_argument(
        "--url", help="build a request for this URL instead of printing"
    )

    parser.add_argument("--method", help="request method", default="POST")

    parser.add_argument(
        "--destination",
        help="where the request carries the parameters",
        choices=["auto", "query", "body"],
        default="auto",
    )

    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )

    return parser.parse_args()


def main() -> None:
    args = parse_args()
    runner = Runner(args.configfile)
    if args.url is None:
        print(runner.encode_file(args.paramsfile))
        return

    req = runner.prepare_file(
        args.paramsfile, args.method, args.url, args.destination
    )
    print(f"{req.method} {req.url}")
    if req.body:
        print(req.body.decode("utf8"))


if __name__ == "__main__":
    main()
