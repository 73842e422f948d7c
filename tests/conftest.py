import pytest

ENV_KEYS = (
    "SALES_REPORT_TOP_N",
    "SALES_REPORT_INPUT",
    "SALES_REPORT_MOCK_SEED",
    "SALES_REPORT_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def single_seller_dataset():
    return {
        "sellers": [{"id": "seller_1", "first_name": "Ivan", "last_name": "Petrov"}],
        "products": [{"sku": "SKU_001", "purchase_price": 10}],
        "purchase_records": [
            {
                "seller_id": "seller_1",
                "total_amount": 30,
                "items": [{"sku": "SKU_001", "quantity": 2, "discount": 0, "sale_price": 15}],
            }
        ],
    }


@pytest.fixture
def sample_dataset():
    """Four sellers; profits: seller_2=70, seller_1=40, seller_3=15, seller_4=0."""
    return {
        "sellers": [
            {"id": "seller_1", "first_name": "Ivan", "last_name": "Petrov"},
            {"id": "seller_2", "first_name": "Maria", "last_name": "Ivanova"},
            {"id": "seller_3", "first_name": "Olga", "last_name": "Smirnova"},
            {"id": "seller_4", "first_name": "Dmitry", "last_name": "Popov"},
        ],
        "products": [
            {"sku": "SKU_001", "name": "Kettle", "purchase_price": 10},
            {"sku": "SKU_002", "name": "Mug", "purchase_price": 5},
            {"sku": "SKU_003", "name": "Toaster", "purchase_price": 20},
        ],
        "purchase_records": [
            {
                "receipt_id": "r1",
                "seller_id": "seller_1",
                "total_amount": 100,
                "items": [
                    {"sku": "SKU_001", "quantity": 2, "discount": 0, "sale_price": 25},
                    {"sku": "SKU_002", "quantity": 4, "discount": 50, "sale_price": 10},
                ],
            },
            {
                "receipt_id": "r2",
                "seller_id": "seller_2",
                "total_amount": 60,
                "items": [{"sku": "SKU_003", "quantity": 1, "discount": 10, "sale_price": 100}],
            },
            {
                "receipt_id": "r3",
                "seller_id": "seller_3",
                "total_amount": 40,
                "items": [{"sku": "SKU_002", "quantity": 3, "discount": 0, "sale_price": 10}],
            },
            {
                "receipt_id": "r4",
                "seller_id": "seller_9",
                "total_amount": 500,
                "items": [{"sku": "SKU_001", "quantity": 100, "discount": 0, "sale_price": 50}],
            },
            {
                "receipt_id": "r5",
                "seller_id": "seller_1",
                "total_amount": 35,
                "items": [
                    {"sku": "SKU_404", "quantity": 1, "discount": 0, "sale_price": 15},
                    {"sku": "SKU_001", "quantity": 1, "discount": 0, "sale_price": 20},
                ],
            },
        ],
    }
