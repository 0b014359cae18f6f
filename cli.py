import argparse
import csv
import datetime
import io
import json
import shutil
import time

import requests

from algorithms import DateKey
from config import load_settings
from db import ExerciseRepository
from errors import ExerciseError
from exercise_service import ExerciseService
from exercise_validator import ExerciseValidator
from localization import Translator
from range_query_service import RangeQueryService


def export_exercises(db_path: str, start: str, end: str, fmt: str = "csv") -> str:
    """Return exercises between ``start`` and ``end`` as CSV or JSON text."""
    queries = RangeQueryService(ExerciseRepository(db_path))
    rows = [ex.to_dict() for ex in queries.list_exercises(start, end)]
    if fmt == "json":
        return json.dumps(rows, ensure_ascii=False, indent=2)
    out = io.StringIO()
    writer = csv.DictWriter(
        out, fieldnames=["id", "date", "type", "title", "target", "progress"]
    )
    writer.writeheader()
    writer.writerows(rows)
    return out.getvalue()


def print_summary(
    db_path: str, start: str, end: str, today: datetime.date | None = None
) -> list[str]:
    queries = RangeQueryService(ExerciseRepository(db_path))
    lines = ["Date        Total Planned InProgress Done Skipped"]
    for s in queries.summarize(start, end, today):
        lines.append(
            f"{DateKey.format(s.day)} {s.total:>5} {s.planned:>7} {s.in_progress:>10} {s.done:>4} {s.skipped:>7}"
        )
    for line in lines:
        print(line)
    return lines


def backup_db(db_path: str, backup_path: str) -> None:
    shutil.copy(db_path, backup_path)


def restore_db(backup_path: str, db_path: str) -> None:
    shutil.copy(backup_path, db_path)


def benchmark(url: str, runs: int = 10) -> None:
    times: list[float] = []
    for _ in range(runs):
        t0 = time.time()
        requests.get(f"{url}/health", timeout=5)
        times.append(time.time() - t0)
    avg = sum(times) / len(times)
    print(f"Average /health response time over {runs} runs: {avg:.4f}s")


DEMO_PLAN = [
    (-2, "run", 5, 5),
    (-1, "yoga", 30, 10),
    (0, "strength", 40, 0),
    (0, "swim", 20, 8),
    (1, "bike", 25, 0),
]


def demo_data(db_path: str, yaml_path: str) -> int:
    """Populate the database with a few days of demo exercises if empty."""
    repo = ExerciseRepository(db_path)
    if repo.fetch_all_exercises():
        print("Database already contains exercises")
        return 0
    settings = load_settings(yaml_path)
    service = ExerciseService(repo, ExerciseValidator(Translator(settings.language)))
    today = datetime.date.today()
    for offset, activity, target, progress in DEMO_PLAN:
        day = today + datetime.timedelta(days=offset)
        ex = service.create(
            {"date": DateKey.format(day), "type": activity, "target": target}
        )
        if progress:
            service.update_progress(ex.id, progress)
    print("Demo data inserted")
    return len(DEMO_PLAN)


def main() -> None:
    parser = argparse.ArgumentParser(description="Utility commands")
    sub = parser.add_subparsers(dest="cmd", required=True)

    exp = sub.add_parser("export")
    exp.add_argument("--db", default="calendar.db")
    exp.add_argument("--from", dest="start", required=True)
    exp.add_argument("--to", dest="end", required=True)
    exp.add_argument("--fmt", choices=["csv", "json"], default="csv")
    exp.add_argument("--out")

    summ = sub.add_parser("summary")
    summ.add_argument("--db", default="calendar.db")
    summ.add_argument("--from", dest="start", required=True)
    summ.add_argument("--to", dest="end", required=True)

    bkp = sub.add_parser("backup")
    bkp.add_argument("--db", default="calendar.db")
    bkp.add_argument("--out", default="backup.db")

    rst = sub.add_parser("restore")
    rst.add_argument("--in", dest="src", default="backup.db")
    rst.add_argument("--db", default="calendar.db")

    demo = sub.add_parser("demo")
    demo.add_argument("--db", default="calendar.db")
    demo.add_argument("--yaml", default="settings.yaml")

    bench = sub.add_parser("benchmark")
    bench.add_argument("--url", default="http://localhost:8000")
    bench.add_argument("--runs", type=int, default=10)

    args = parser.parse_args()

    if args.cmd == "export":
        try:
            data = export_exercises(args.db, args.start, args.end, args.fmt)
        except ExerciseError as e:
            parser.error(str(e))
        if args.out:
            with open(args.out, "w", encoding="utf-8") as f:
                f.write(data)
        else:
            print(data)
    elif args.cmd == "summary":
        try:
            print_summary(args.db, args.start, args.end)
        except ExerciseError as e:
            parser.error(str(e))
    elif args.cmd == "backup":
        backup_db(args.db, args.out)
    elif args.cmd == "restore":
        restore_db(args.src, args.db)
    elif args.cmd == "demo":
        demo_data(args.db, args.yaml)
    elif args.cmd == "benchmark":
        benchmark(args.url, args.runs)


if __name__ == "__main__":
    main()
