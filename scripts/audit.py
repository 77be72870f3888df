"""CLI for auditing a vault: health report, knowledge graph and fix plans"""

import argparse
import sys

from loguru import logger

from vaultmind.analysis import to_dot
from vaultmind.config import settings
from vaultmind.domain.fixes import FixCategory
from vaultmind.errors import VaultMindError
from vaultmind.fixers import FixApplier
from vaultmind.orchestrator import VaultAuditor


def scan(path: str) -> str:
    auditor = VaultAuditor.for_vault(path)
    _, report = auditor.audit_vault(path)
    return report.model_dump_json(indent=2)


def doctor(path: str) -> str:
    auditor = VaultAuditor.for_vault(path)
    _, report = auditor.audit_vault(path)
    return report.health.model_dump_json(indent=2)


def graph(path: str, dot: bool = False) -> str:
    auditor = VaultAuditor.for_vault(path)
    _, report = auditor.audit_vault(path)
    if dot:
        return to_dot(report.graph)
    return report.graph.model_dump_json(indent=2)


def fix(path: str, only: FixCategory | None = None, apply: bool = False) -> str:
    auditor = VaultAuditor.for_vault(path)
    documents, report = auditor.audit_vault(path)
    plan = auditor.plan_fixes(documents, report, only)
    result = FixApplier().apply(path, plan, apply=apply)
    return result.model_dump_json(indent=2)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Memory health analyzer for Obsidian-based agent workspaces"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    scan_parser = subparsers.add_parser("scan", help="Scan a vault and produce a health report")
    scan_parser.add_argument("path", type=str, help="Vault directory")

    doctor_parser = subparsers.add_parser("doctor", help="Grade vault health")
    doctor_parser.add_argument("path", type=str, help="Vault directory")

    graph_parser = subparsers.add_parser("graph", help="Output the knowledge graph")
    graph_parser.add_argument("path", type=str, help="Vault directory")
    graph_parser.add_argument("--dot", action="store_true", help="Output Graphviz DOT format")

    fix_parser = subparsers.add_parser("fix", help="Plan (and optionally apply) fixes")
    fix_parser.add_argument("path", type=str, help="Vault directory")
    fix_parser.add_argument(
        "--only",
        type=str,
        choices=["links", "orphans", "isolated"],
        required=False,
        help="Only plan fixes of this category",
    )
    fix_parser.add_argument(
        "--apply", action="store_true", help="Write the changes instead of a dry run"
    )

    args = parser.parse_args(argv)

    logger.configure(handlers=[{"sink": sys.stderr, "level": settings.log_level}])

    try:
        if args.command == "scan":
            output = scan(args.path)
        elif args.command == "doctor":
            output = doctor(args.path)
        elif args.command == "graph":
            output = graph(args.path, dot=args.dot)
        else:
            output = fix(args.path, only=args.only, apply=args.apply)
    except VaultMindError as e:
        logger.error(str(e))
        return 1

    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
