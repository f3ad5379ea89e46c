import argparse
import logging
import os
import sys

import yaml
from dotenv import find_dotenv, load_dotenv
from rich.console import Console
from rich.logging import RichHandler

from clientdemo import GITHUB_GRAPHQL_URL, Renderer, RepoQueryError, get_repo_data
from gqlclient import GqlClient, GqlClientError, RequestsTransport

CONFIG_FILE = "config.yaml"

DEFAULTS = {
    "github_url": GITHUB_GRAPHQL_URL,
    "token_env": "GITHUB_TOKEN",
    "owner": "mikebway",
    "name": "gogql",
    "branch": "master",
    "skip_verify": False,
}

EPILOG = """\
The GITHUB_TOKEN environment variable should be set to a GitHub personal
access token with rights to read the repository being looked up. It may
also be supplied through a .env file in the working directory.

Use --token-env to read the token from a different variable, so that more
than one token can be kept for multiple GitHub services (public and
enterprise, for example).
"""

logger = logging.getLogger("clientdemo")


class DemoError(Exception):
    """The demo could not be set up."""
    pass


def load_config(path=CONFIG_FILE):
    """
    Load the `demo` section of the YAML configuration file.

    Returns:
        dict: The demo settings, or empty if the file does not exist.

    Raises:
        DemoError: If the file is not valid YAML or is not laid out as mappings.
    """
    if not os.path.exists(path):
        return {}
    try:
        with open(path, "r") as f:
            config = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise DemoError(f"could not read {path}: {e}") from e
    if not isinstance(config, dict):
        raise DemoError(f"{path} must contain a mapping at the top level")

    demo = config.get("demo") or {}
    if not isinstance(demo, dict):
        raise DemoError(f"the demo section of {path} must be a mapping")
    unknown = set(demo) - set(DEFAULTS)
    if unknown:
        logger.warning("Ignoring unknown settings in %s: %s", path, ", ".join(sorted(unknown)))
    return {k: v for k, v in demo.items() if k in DEFAULTS}


def build_parser(defaults):
    parser = argparse.ArgumentParser(
        description="GraphQL Client Demo: look up a GitHub repository.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--config", default=CONFIG_FILE, help=f"YAML settings file (default: {CONFIG_FILE}).")
    parser.add_argument("--github", dest="github_url", default=defaults["github_url"],
                        help="URL of the GitHub service GraphQL API.")
    parser.add_argument("--token-env", default=defaults["token_env"],
                        help="Name of the environment variable that provides the GitHub access token.")
    parser.add_argument("--owner", default=defaults["owner"],
                        help="The organization or user that owns the repository.")
    parser.add_argument("--name", default=defaults["name"], help="The name of the repository.")
    parser.add_argument("--branch", default=defaults["branch"], help="Branch to list recent commits from.")
    parser.add_argument("--skipverify", dest="skip_verify", action="store_true", default=defaults["skip_verify"],
                        help="Skip TLS certificate verification.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log request details.")
    return parser


def setup_logging(verbose):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def run_demo(github_url, token_env, owner, name, branch="master", skip_verify=False, console=None):
    """
    Look up a repository and print what was found.

    Raises:
        DemoError: If the access token is not set.
        RepoQueryError: If GitHub reported errors for the lookup.
        GqlClientError: If the GraphQL call failed.
    """
    token = os.environ.get(token_env)
    if not token:
        raise DemoError(f"the {token_env} environment variable is not set")

    # GitHub expects the token prefixed with "token "
    client = GqlClient(github_url, f"token {token}", transport=RequestsTransport(verify=not skip_verify))
    logger.debug("Looking up %s/%s on %s", owner, name, client.target_url)

    result = get_repo_data(client, owner, name, branch)
    Renderer(console).render(result)
    return result


def main(argv=None):
    # The config file location is needed before the real defaults are known
    pre = argparse.ArgumentParser(add_help=False)
    pre.add_argument("--config", default=CONFIG_FILE)
    pre.add_argument("-v", "--verbose", action="store_true")
    known, _ = pre.parse_known_args(argv)
    setup_logging(known.verbose)

    defaults = dict(DEFAULTS)
    try:
        defaults.update(load_config(known.config))
    except DemoError as e:
        fail(build_parser(DEFAULTS), e)
    parser = build_parser(defaults)
    args = parser.parse_args(argv)

    load_dotenv(find_dotenv(usecwd=True))

    try:
        run_demo(args.github_url, args.token_env, args.owner, args.name,
                 branch=args.branch, skip_verify=args.skip_verify)
    except (DemoError, RepoQueryError, GqlClientError) as e:
        fail(parser, e)

    print("\nGraphQL Client Demo finished OK\n")
    sys.exit(0)


def fail(parser, error):
    print(f"GraphQL Client Demo FAILED:\n\n {error}\n", file=sys.stderr)
    parser.print_help(file=sys.stderr)
    sys.exit(2)


if __name__ == "__main__":
    main()
