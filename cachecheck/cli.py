import click
import sys
import json
import asyncio
from cachecheck.utils.logger import setup_logger, logger
from cachecheck.engine import Engine, normalize_url
from cachecheck.logic.strategies import DirectStrategy, RelayStrategy, AllOriginsStrategy
from cachecheck.utils.reporter import Reporter
from cachecheck.utils.snippets import generate_snippets, LANGUAGES

@click.group()
@click.version_option(version="0.1.0")
@click.option('--verbose', '-v', is_flag=True, help="Enable verbose logging.")
@click.option('--quiet', '-q', is_flag=True, help="Suppress informational output.")
@click.option('--log-level', '-l', help="Set log level (DEBUG, INFO, WARNING, ERROR, CRITICAL). overrides -v and -q.")
def cli(verbose, quiet, log_level):
    """
    cachecheck - inspect and score the HTTP caching headers of a website.
    """
    setup_logger(verbose, quiet, log_level)

@cli.command()
@click.option('--url', '-u', multiple=True, help="URL to check. Can be used multiple times.")
@click.option('--file', '-f', type=click.File('r'), help="File containing URLs to check.")
@click.option('--relay', '-r', envvar="CACHECHECK_RELAY", help="Base URL of a cachecheck relay (serves /proxy).")
@click.option('--allorigins', envvar="CACHECHECK_ALLORIGINS", help="Base URL of an allorigins-style relay (serves /get).")
@click.option('--no-direct', is_flag=True, help="Skip the direct request and only use relays.")
@click.option('--method', '-m', default="GET", help="HTTP method for the direct request (default: GET).")
@click.option('--geo', is_flag=True, help="Resolve the server IP and look up its location.")
@click.option('--json', 'as_json', is_flag=True, help="Print results as JSON.")
@click.option('--output', '-o', help="File to save JSON results to.")
@click.option('--html', 'html_output', help="File to save an HTML report to.")
@click.option('--snippets', is_flag=True, help="Also print curl, Go and PHP equivalents.")
@click.option('--timeout', '-t', default=10, envvar="CACHECHECK_TIMEOUT", type=int, help="Request timeout in seconds.")
@click.option('--concurrency', '-c', default=5, envvar="CACHECHECK_CONCURRENCY", type=int, help="Max concurrent checks.")
def check(url, file, relay, allorigins, no_direct, method, geo, as_json, output, html_output, snippets, timeout, concurrency):
    """
    Fetch headers for one or more URLs and score their caching setup.
    """
    urls = list(url)

    if file:
        for line in file:
            line = line.strip()
            if line:
                urls.append(line)

    # Check for stdin
    if not urls and not file and not sys.stdin.isatty():
        for line in sys.stdin:
            line = line.strip()
            if line:
                urls.append(line)

    if not urls:
        logger.error("No URLs provided. Use --url, --file, or pipe URLs via stdin.")
        return

    strategies = []
    if not no_direct:
        strategies.append(DirectStrategy(method=method.upper()))
    if relay:
        strategies.append(RelayStrategy(relay))
    if allorigins:
        strategies.append(AllOriginsStrategy(allorigins))
    if not strategies:
        logger.error("--no-direct needs --relay or --allorigins.")
        return

    logger.info(f"Checking {len(urls)} URLs via {', '.join(s.name for s in strategies)}")

    engine = Engine(strategies=strategies, concurrency=concurrency, timeout=timeout, geo=geo)
    results = asyncio.run(engine.run(urls))

    data = [r.to_dict() for r in results]
    if snippets:
        for item in data:
            item["snippets"] = generate_snippets(item["url"])

    if as_json:
        click.echo(json.dumps(data, indent=2))
    else:
        for index, result in enumerate(results):
            if index:
                click.echo("\n" + "=" * 60 + "\n")
            click.echo(Reporter.render_text(result))
            if snippets:
                _echo_snippets(generate_snippets(result.url))

    if output:
        try:
            with open(output, 'w') as f:
                json.dump(data, f, indent=2)
            logger.info(f"Results saved to {output}")
        except IOError as e:
            logger.error(f"Failed to write results to {output}: {e}")

    if html_output:
        try:
            Reporter.generate_html_report(results, html_output)
            logger.info(f"HTML report saved to {html_output}")
        except IOError as e:
            logger.error(f"Failed to write HTML report to {html_output}: {e}")

def _echo_snippets(snippets, languages=LANGUAGES):
    titles = {
        "curl": "curl",
        "go": "Go (save as cachecheck.go, run: go run cachecheck.go <url>)",
        "php": "PHP 8.1+ (save as cachecheck.php, run: php cachecheck.php <url>)",
    }
    for lang in languages:
        click.secho(f"\n--- {titles[lang]} ---", bold=True)
        click.echo(snippets[lang])

@cli.command()
@click.argument('url')
@click.option('--lang', type=click.Choice(LANGUAGES + ("all",)), default="all", help="Snippet language.")
def snippet(url, lang):
    """
    Print a command-line equivalent of the header check for URL.
    """
    snippets = generate_snippets(normalize_url(url))
    if lang == "all":
        _echo_snippets(snippets)
    else:
        click.echo(snippets[lang])

@cli.command()
@click.option('--host', default="0.0.0.0", envvar="CACHECHECK_HOST", help="Interface to bind.")
@click.option('--port', '-p', default=3000, envvar="CACHECHECK_PORT", type=int, help="Port to listen on.")
@click.option('--timeout', '-t', default=10, envvar="CACHECHECK_TIMEOUT", type=int, help="Upstream request timeout in seconds.")
def serve(host, port, timeout):
    """
    Run the relay server (GET /proxy?url=...).
    """
    from cachecheck.relay import run_relay
    run_relay(host=host, port=port, timeout=timeout)

if __name__ == "__main__":
    cli()
