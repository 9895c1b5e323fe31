"""Command-line entry point: search a listing export or serve the search API."""

import argparse
import json
import sys
from collections.abc import Sequence

from imovel_search.config import Settings
from imovel_search.filters.engine import PropertyFilterEngine
from imovel_search.listings import ListingRepository, ListingSourceError
from imovel_search.logging import configure_logging, get_logger, resolve_level
from imovel_search.models import PropertyRecord, SearchRequest, SearchResult
from imovel_search.web.filters import build_search_request

logger = get_logger(__name__)


def _format_price(value: float | None) -> str:
    if not value:
        return "-"
    # pt-BR grouping: R$ 1.250.000
    return "R$ " + f"{value:,.0f}".replace(",", ".")


def print_listing(record: PropertyRecord) -> None:
    """Print one listing in the compact card layout."""
    print(f"[{record.id}] {record.titulo or '(sem título)'}")
    print(f"  {record.tipo_imovel or '-'} | {record.operacao or '-'}")
    location = ", ".join(part for part in (record.bairro, record.cidade) if part)
    if location:
        print(f"  Local: {location}")
    print(
        f"  Quartos: {record.quartos or 0} | Banheiros: {record.banheiros or 0} | "
        f"Vagas: {record.vagas or 0} | Área: {record.area_priv or 0:g} m²"
    )
    if record.valor_venda:
        print(f"  Venda: {_format_price(record.valor_venda)}")
    if record.valor_locacao:
        print(f"  Locação: {_format_price(record.valor_locacao)}")
    if record.valor_diaria:
        print(f"  Diária: {_format_price(record.valor_diaria)}")
    print()


def print_result(result: SearchResult, *, as_json: bool = False) -> None:
    """Print a result page as text cards or JSON."""
    if as_json:
        print(json.dumps(result.model_dump(mode="json"), ensure_ascii=False, indent=2))
        return

    print(f"{result.total} imóveis encontrados (página {result.page}/{result.total_pages})\n")
    for record in result.items:
        print_listing(record)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Imóvel Search - filter a listing export or serve the search API"
    )
    parser.add_argument("--listings", help="Listing export (JSON); defaults to settings")
    parser.add_argument("--serve", action="store_true", help="Start the search API server")
    parser.add_argument("--json", action="store_true", help="Print results as JSON")
    parser.add_argument("--debug", action="store_true", help="Enable debug-level logging")

    filters = parser.add_argument_group("filters")
    filters.add_argument("--operacao", action="append", default=[], help="venda, locacao...")
    filters.add_argument("--tipo", action="append", default=[], help="Property type")
    filters.add_argument("--cidade", action="append", default=[], help="City")
    filters.add_argument("--bairro", action="append", default=[], help="Neighborhood")
    filters.add_argument("-q", "--query", help="Free-text search")
    filters.add_argument("--price", help="Price preset, e.g. 200000-500000")
    filters.add_argument("--min-price")
    filters.add_argument("--max-price")
    filters.add_argument("--min-area")
    filters.add_argument("--max-area")
    filters.add_argument("--quartos", help="Bedrooms (4 means 4 or more)")
    filters.add_argument("--banheiros", help="Bathrooms (4 means 4 or more)")
    filters.add_argument("--vagas", help="Parking spaces (4 means 4 or more)")
    filters.add_argument("--lat")
    filters.add_argument("--lon")
    filters.add_argument("--raio", help="Radius in km around --lat/--lon")

    output = parser.add_argument_group("ordering")
    output.add_argument("--sort", help="Field to sort by, e.g. valor_venda")
    output.add_argument("--desc", action="store_true", help="Sort descending")
    output.add_argument("--page", default="1")
    output.add_argument("--per-page")
    return parser


def request_from_args(args: argparse.Namespace, settings: Settings) -> SearchRequest:
    """Build a SearchRequest from parsed CLI arguments."""
    return build_search_request(
        settings,
        operacao=args.operacao,
        tipo=args.tipo,
        cidade=args.cidade,
        bairro=args.bairro,
        q=args.query,
        price=args.price,
        min_price=args.min_price,
        max_price=args.max_price,
        min_area=args.min_area,
        max_area=args.max_area,
        quartos=args.quartos,
        banheiros=args.banheiros,
        vagas=args.vagas,
        lat=args.lat,
        lon=args.lon,
        raio=args.raio,
        sort=args.sort,
        direction="desc" if args.desc else "asc",
        page=args.page,
        per_page=args.per_page,
    )


def run_search(settings: Settings, request: SearchRequest, *, as_json: bool = False) -> int:
    """Load the export, run one search and print it. Returns the exit code."""
    repository = ListingRepository(settings.listings_path)
    try:
        records = repository.load()
    except ListingSourceError as e:
        logger.error("listings_load_failed", path=settings.listings_path, error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1

    engine = PropertyFilterEngine(state_radius_km=settings.state_radius_km)
    print_result(engine.search(records, request), as_json=as_json)
    return 0


def main(argv: Sequence[str] | None = None) -> None:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    try:
        settings = Settings()
    except Exception as e:
        print(f"Error: Failed to load settings. {e}", file=sys.stderr)
        sys.exit(1)

    if args.listings:
        settings = settings.model_copy(update={"listings_path": args.listings})

    level = resolve_level("debug" if args.debug else settings.log_level)
    configure_logging(json_output=settings.json_logs, level=level)

    logger.info(
        "starting_imovel_search",
        listings=settings.listings_path,
        serve=args.serve,
    )

    if args.serve:
        import uvicorn

        from imovel_search.web.app import create_app

        app = create_app(settings)
        uvicorn.run(app, host=settings.web_host, port=settings.web_port, log_level="info")
        return

    sys.exit(run_search(settings, request_from_args(args, settings), as_json=args.json))


if __name__ == "__main__":
    main()
