import os

from invoice_dashboard import create_admin_user, create_app, db
from invoice_dashboard.models import Customer, Invoice, Revenue

CUSTOMERS = [
    ("d6e15727-9fe1-4961-8c5b-ea44a9bd81aa", "Evil Rabbit", "evil@rabbit.com", "/customers/evil-rabbit.png"),
    ("3958dc9e-712f-4377-85e9-fec4b6a6442a", "Delba de Oliveira", "delba@oliveira.com", "/customers/delba-de-oliveira.png"),
    ("3958dc9e-742f-4377-85e9-fec4b6a6442a", "Lee Robinson", "lee@robinson.com", "/customers/lee-robinson.png"),
    ("76d65c26-f784-44a2-ac19-586678f7c2f2", "Michael Novotny", "michael@novotny.com", "/customers/michael-novotny.png"),
    ("cc27c14a-0acf-4f4a-a6c9-d45682c144b9", "Amy Burns", "amy@burns.com", "/customers/amy-burns.png"),
    ("13d07535-c59e-4157-a011-f8d2ef4e0cbb", "Balazs Orban", "balazs@orban.com", "/customers/balazs-orban.png"),
]

# (customer index, amount in cents, status, date)
INVOICES = [
    (0, 15795, "pending", "2022-12-06"),
    (1, 20348, "pending", "2022-11-14"),
    (4, 3040, "paid", "2022-10-29"),
    (3, 44800, "paid", "2023-09-10"),
    (5, 34577, "pending", "2023-08-05"),
    (2, 54246, "pending", "2023-07-16"),
    (0, 666, "pending", "2023-06-27"),
    (3, 32545, "paid", "2023-06-09"),
    (4, 1250, "paid", "2023-06-17"),
    (5, 8546, "paid", "2023-06-07"),
    (1, 500, "paid", "2023-08-19"),
    (5, 8945, "paid", "2023-06-03"),
    (2, 1000, "paid", "2022-06-05"),
]

REVENUE = [
    ("Jan", 2000), ("Feb", 1800), ("Mar", 2200), ("Apr", 2500),
    ("May", 2300), ("Jun", 3200), ("Jul", 3500), ("Aug", 3700),
    ("Sep", 2500), ("Oct", 2800), ("Nov", 3000), ("Dec", 4800),
]


def seed_placeholder_data() -> None:
    """Insert the demo customers, invoices and revenue if the tables are empty."""
    if Customer.query.count() == 0:
        db.session.add_all(
            Customer(id=cid, name=name, email=email, image_url=image_url)
            for cid, name, email, image_url in CUSTOMERS
        )
    if Invoice.query.count() == 0:
        db.session.add_all(
            Invoice(
                customer_id=CUSTOMERS[index][0],
                amount=amount,
                status=status,
                date=date,
            )
            for index, amount, status, date in INVOICES
        )
    if Revenue.query.count() == 0:
        db.session.add_all(
            Revenue(month=month, revenue=revenue) for month, revenue in REVENUE
        )
    db.session.commit()


def seed_initial_data() -> None:
    """Seed the database with an admin user and the placeholder records."""
    app, _ = create_app([])
    with app.app_context():
        create_admin_user()
        if os.getenv("SEED_PLACEHOLDER_DATA", "1").lower() in {"1", "true", "yes"}:
            seed_placeholder_data()
        print("Initial admin user and placeholder data created.")


if __name__ == "__main__":
    seed_initial_data()
