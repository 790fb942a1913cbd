import unittest

from sqlalchemy import inspect

from inventory_api.database import build_engine, init_db


class DatabaseSchemaTest(unittest.TestCase):
    def setUp(self):
        self.engine = build_engine("sqlite:///:memory:")

    def tearDown(self):
        self.engine.dispose()

    def test_init_db_creates_products_table(self):
        init_db(self.engine)

        inspector = inspect(self.engine)
        self.assertIn("products", inspector.get_table_names())
        columns = {column["name"] for column in inspector.get_columns("products")}
        self.assertEqual(
            columns,
            {
                "id",
                "name",
                "description",
                "stock_quantity",
                "low_stock_threshold",
                "created_at",
                "updated_at",
            },
        )
        indexes = {index["name"] for index in inspector.get_indexes("products")}
        self.assertTrue({"idx_products_name", "idx_products_stock_quantity"} <= indexes)

    def test_init_db_is_idempotent(self):
        init_db(self.engine)
        init_db(self.engine)

        self.assertEqual(inspect(self.engine).get_table_names(), ["products"])


if __name__ == "__main__":
    unittest.main()
