class ProductException(Exception):
    pass


class ProductNotFound(ProductException):
    def __init__(self, product_id: int):
        super().__init__("Product not found")
        self.product_id = product_id


class ProductValidationError(ProductException):
    pass


class DuplicateSku(ProductValidationError):
    def __init__(self, sku: str):
        super().__init__(f"A product with SKU '{sku}' already exists")
        self.sku = sku
