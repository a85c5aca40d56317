from pdr_tracker.core.logging import configure_logging
from pdr_tracker.db.session import engine, Session, init_db
from pdr_tracker.db.seed import seed_all


def run_seed():
    configure_logging()
    init_db()
    with Session(engine) as session:
        summary = seed_all(session)
    print(summary)


if __name__ == "__main__":
    run_seed()
