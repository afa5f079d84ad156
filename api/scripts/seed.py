import argparse
import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

from promdate.database import SessionLocal, init_db
from promdate.services.seeding import seed_dummy_data


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed dummy Prom Match profiles")
    parser.add_argument("--n-users", type=int, default=40)
    parser.add_argument("--organization", action="append", default=[], help="may be given more than once")
    parser.add_argument("--reset", action="store_true")
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--privileged-share", type=float, default=0.1)
    parser.add_argument("--event-in-days", type=int, default=30)
    args = parser.parse_args()

    init_db()
    with SessionLocal() as db:
        summary = seed_dummy_data(
            db,
            n_users=args.n_users,
            organizations=args.organization or None,
            reset=args.reset,
            seed=args.seed,
            privileged_share=args.privileged_share,
            event_in_days=args.event_in_days,
        )

    print("Seed completed")
    for k, v in summary.items():
        print(f"- {k}: {v}")


if __name__ == "__main__":
    main()
