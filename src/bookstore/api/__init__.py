"""HTTP surface of the bookstore: application factory, access gate and error mapping."""
