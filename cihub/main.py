import argparse
import asyncio
import json
import logging

from cihub.core.session_controller import SessionController
from cihub.domain.request_builder import DEFAULT_FORM
from cihub.domain.settings_loader import load_settings
from cihub.infra.estimator_api_client import EstimatorApiClient
from cihub.infra.file_store import FileKeyValueStore
from cihub.presentation.summary import describe_entry, describe_result

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)


def _parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Estimate Cloud Run cost, CO2 and risk score")
    parser.add_argument("--config", help="JSON settings file", default=None)
    parser.add_argument("--base-url", help="Estimator base URL (overrides config)", default=None)
    parser.add_argument(
        "--set", metavar="FIELD=VALUE", action="append", default=[],
        help=f"Form field override, repeatable. Fields: {', '.join(DEFAULT_FORM)}",
    )
    parser.add_argument("--history", action="store_true", help="List recent runs and exit")
    parser.add_argument("--restore", type=int, metavar="N", help="Show run N from history without querying")
    parser.add_argument("--check", action="store_true", help="Check estimator health before estimating")
    return parser.parse_args(argv)


def _form_from(pairs: list[str]) -> dict[str, str]:
    form = {}
    for pair in pairs:
        name, sep, value = pair.partition("=")
        if not sep:
            raise SystemExit(f"--set expects FIELD=VALUE, got {pair!r}")
        form[name.strip()] = value
    return form


def main(argv=None) -> int:
    args = _parse_args(argv)
    settings = load_settings(args.config)
    if args.base_url:
        settings.base_url = args.base_url

    # --- Infrastructure ---
    api = EstimatorApiClient(
        base_url=settings.base_url,
        timeout=settings.timeout,
        estimate_path=settings.estimate_path,
        health_path=settings.health_path,
    )
    store = FileKeyValueStore(settings.history_dir)

    # --- Session ---
    session = SessionController(api, store, history_key=settings.history_key)

    if args.history:
        history = session.history()
        if not history:
            print("No history yet - run an estimate.")
        for idx, entry in enumerate(history):
            print(f"[{idx}] {describe_entry(entry)}")
        return 0

    if args.restore is not None:
        try:
            form, result = session.restore(args.restore)
        except IndexError:
            print(f"No history entry {args.restore}")
            return 1
        print(json.dumps(form.to_payload(), indent=2))
        print("\n".join(describe_result(result)))
        return 0

    if args.check and not api.check_health():
        print(f"[cihub] Estimator at {settings.base_url} is not healthy")
        return 1

    result = asyncio.run(session.submit(_form_from(args.set)))
    print("\n".join(describe_result(result.response)))
    return 0 if result.ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
