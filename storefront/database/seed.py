"""Seed data: the 58 wilayas and the demo heating catalog"""

from decimal import Decimal

from ..models.product import Product, ProductCategory
from ..models.region import Region

# (code, name, Arabic name, shipping cost in DZD)
WILAYAS: list[tuple[str, str, str, int]] = [
    ("01", "Adrar", "أدرار", 1500),
    ("02", "Chlef", "الشلف", 800),
    ("03", "Laghouat", "الأغواط", 1000),
    ("04", "Oum El Bouaghi", "أم البواقي", 900),
    ("05", "Batna", "باتنة", 900),
    ("06", "Béjaïa", "بجاية", 800),
    ("07", "Biskra", "بسكرة", 1000),
    ("08", "Béchar", "بشار", 1500),
    ("09", "Blida", "البليدة", 600),
    ("10", "Bouira", "البويرة", 700),
    ("11", "Tamanrasset", "تمنراست", 2000),
    ("12", "Tébessa", "تبسة", 1000),
    ("13", "Tlemcen", "تلمسان", 900),
    ("14", "Tiaret", "تيارت", 900),
    ("15", "Tizi Ouzou", "تيزي وزو", 700),
    ("16", "Alger", "الجزائر", 400),
    ("17", "Djelfa", "الجلفة", 900),
    ("18", "Jijel", "جيجل", 900),
    ("19", "Sétif", "سطيف", 800),
    ("20", "Saïda", "سعيدة", 900),
    ("21", "Skikda", "سكيكدة", 900),
    ("22", "Sidi Bel Abbès", "سيدي بلعباس", 900),
    ("23", "Annaba", "عنابة", 900),
    ("24", "Guelma", "قالمة", 900),
    ("25", "Constantine", "قسنطينة", 800),
    ("26", "Médéa", "المدية", 700),
    ("27", "Mostaganem", "مستغانم", 900),
    ("28", "M'Sila", "المسيلة", 900),
    ("29", "Mascara", "معسكر", 900),
    ("30", "Ouargla", "ورقلة", 1500),
    ("31", "Oran", "وهران", 800),
    ("32", "El Bayadh", "البيض", 1000),
    ("33", "Illizi", "إليزي", 2000),
    ("34", "Bordj Bou Arreridj", "برج بوعريريج", 800),
    ("35", "Boumerdès", "بومرداس", 600),
    ("36", "El Tarf", "الطارف", 1000),
    ("37", "Tindouf", "تندوف", 2000),
    ("38", "Tissemsilt", "تيسمسيلت", 900),
    ("39", "El Oued", "الوادي", 1500),
    ("40", "Khenchela", "خنشلة", 1000),
    ("41", "Souk Ahras", "سوق أهراس", 1000),
    ("42", "Tipaza", "تيبازة", 600),
    ("43", "Mila", "ميلة", 800),
    ("44", "Aïn Defla", "عين الدفلى", 700),
    ("45", "Naâma", "النعامة", 1000),
    ("46", "Aïn Témouchent", "عين تموشنت", 900),
    ("47", "Ghardaïa", "غرداية", 1500),
    ("48", "Relizane", "غليزان", 900),
    ("49", "Timimoun", "تيميمون", 1800),
    ("50", "Bordj Badji Mokhtar", "برج باجي مختار", 2500),
    ("51", "Ouled Djellal", "أولاد جلال", 1200),
    ("52", "Béni Abbès", "بني عباس", 1800),
    ("53", "In Salah", "عين صالح", 2000),
    ("54", "In Guezzam", "عين قزام", 2500),
    ("55", "Touggourt", "تقرت", 1500),
    ("56", "Djanet", "جانت", 2200),
    ("57", "El M'Ghair", "المغير", 1200),
    ("58", "El Meniaa", "المنيعة", 1800),
]


def wilaya_regions() -> list[Region]:
    """Region rows for every wilaya, all active"""
    return [
        Region(code=code, name=name, name_ar=name_ar, shipping_cost=Decimal(cost))
        for code, name, name_ar, cost in WILAYAS
    ]


# Mock product catalog
DEMO_PRODUCTS: list[Product] = [
    Product(
        id="3f6c2a4e-8b1d-4c7a-9e2f-1a5b6c7d8e01",
        name="Chaudière murale gaz condensation 24 kW",
        sku="BOIL-COND-24",
        category=ProductCategory.BOILER,
        price=Decimal("185000"),
        stock_quantity=12,
        image_ref="products/chaudiere-cond-24.jpg",
    ),
    Product(
        id="3f6c2a4e-8b1d-4c7a-9e2f-1a5b6c7d8e02",
        name="Chaudière murale gaz 28 kW double service",
        sku="BOIL-STD-28",
        category=ProductCategory.BOILER,
        price=Decimal("142000"),
        sale_price=Decimal("129000"),
        stock_quantity=8,
        image_ref="products/chaudiere-28.jpg",
    ),
    Product(
        id="3f6c2a4e-8b1d-4c7a-9e2f-1a5b6c7d8e03",
        name="Radiateur aluminium 10 éléments",
        sku="RAD-ALU-10",
        category=ProductCategory.RADIATOR,
        price=Decimal("16500"),
        stock_quantity=60,
        image_ref="products/radiateur-alu-10.jpg",
    ),
    Product(
        id="3f6c2a4e-8b1d-4c7a-9e2f-1a5b6c7d8e04",
        name="Radiateur acier panneau 600x1000",
        sku="RAD-STEEL-6010",
        category=ProductCategory.RADIATOR,
        price=Decimal("21000"),
        stock_quantity=25,
        image_ref="products/radiateur-acier.jpg",
    ),
    Product(
        id="3f6c2a4e-8b1d-4c7a-9e2f-1a5b6c7d8e05",
        name="Thermostat d'ambiance programmable",
        sku="ACC-THERMO-PRG",
        category=ProductCategory.ACCESSORY,
        price=Decimal("6800"),
        stock_quantity=100,
        image_ref="products/thermostat.jpg",
    ),
    Product(
        id="3f6c2a4e-8b1d-4c7a-9e2f-1a5b6c7d8e06",
        name="Vanne thermostatique 1/2\"",
        sku="ACC-VALVE-12",
        category=ProductCategory.ACCESSORY,
        price=Decimal("1900"),
        stock_quantity=200,
        image_ref="products/vanne.jpg",
    ),
    Product(
        id="3f6c2a4e-8b1d-4c7a-9e2f-1a5b6c7d8e07",
        name="Chaudière fioul au sol 32 kW",
        sku="BOIL-OIL-32",
        category=ProductCategory.BOILER,
        price=Decimal("240000"),
        stock_quantity=0,
        is_active=False,
        image_ref="products/chaudiere-fioul.jpg",
    ),
]
