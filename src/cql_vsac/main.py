#!/usr/bin/env python3
"""
cql-vsac command line: download value sets from VSAC and print their codes as JSON.
"""

import argparse
import asyncio
import json
import logging
import sys
from typing import List, Optional

from cql_vsac.config.settings import get_settings
from cql_vsac.factory import create_code_service
from cql_vsac.models.vsac_models import CodeSystemType, DownloadOptions, ValueSetReference
from cql_vsac.utils.error_handlers import MissingApiKeyError, ValueSetDownloadErrors

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="cql-vsac", description=__doc__)
    parser.add_argument("identifiers", nargs="+", help="Value set OID, urn:oid URN or VSAC FHIR URL")
    parser.add_argument("--value-set-version", help="Value set version to request")
    parser.add_argument("--api-key", help="UMLS API key (defaults to UMLS_API_KEY)")
    parser.add_argument("--fhir", action="store_true", default=None, help="Use the VSAC FHIR API instead of SVS")
    parser.add_argument(
        "--code-system-type",
        choices=[t.value for t in CodeSystemType],
        help="How SVS concepts report their code system"
    )
    return parser


async def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    if args.fhir is not None:
        settings = settings.model_copy(update={"vsac_use_fhir": args.fhir})

    service = create_code_service(settings)
    options = DownloadOptions(svs_code_system_type=args.code_system_type or settings.svs_code_system_type)
    references = [ValueSetReference(id=identifier, version=args.value_set_version) for identifier in args.identifiers]

    status = 0
    try:
        await service.ensure_value_sets(references, args.api_key, options)
    except MissingApiKeyError as error:
        logger.error(str(error))
        return 1
    except ValueSetDownloadErrors as error:
        for download_error in error.errors:
            logger.error(f"{download_error}: {download_error.__cause__}")
        status = 1

    output = {
        reference.id: [code.model_dump() for code in service.expand_value_set(reference.id, reference.version)]
        for reference in references
    }
    print(json.dumps(output, indent=2))
    return status


def run():
    logging.basicConfig(
        level=get_settings().log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stderr)
        ]
    )
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        logger.info("Interrupted")
        sys.exit(130)


if __name__ == "__main__":
    run()
