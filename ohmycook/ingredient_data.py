"""The ingredient table. The first column is the canonical English key."""

from ohmycook.models import Category


C = Category


INGREDIENTS: tuple[tuple[str, str, Category, str], ...] = (
    # Vegetables
    ("Onion", "양파", C.vegetables, "🧅"),
    ("Garlic", "마늘", C.vegetables, "🧄"),
    ("Green Onion", "대파", C.vegetables, "🌱"),
    ("Potato", "감자", C.vegetables, "🥔"),
    ("Carrot", "당근", C.vegetables, "🥕"),
    ("Bell Pepper", "파프리카", C.vegetables, "🫑"),
    ("Cabbage", "양배추", C.vegetables, "🥬"),
    ("Lettuce", "상추", C.vegetables, "🥬"),
    ("Spinach", "시금치", C.vegetables, "🥬"),
    ("Kale", "케일", C.vegetables, "🥬"),
    ("Broccoli", "브로콜리", C.vegetables, "🥦"),
    ("Cauliflower", "콜리플라워", C.vegetables, "🥦"),
    ("Zucchini", "애호박", C.vegetables, "🥒"),
    ("Eggplant", "가지", C.vegetables, "🍆"),
    ("Tomato", "토마토", C.vegetables, "🍅"),
    ("Cucumber", "오이", C.vegetables, "🥒"),
    ("Mushroom", "버섯", C.vegetables, "🍄"),
    ("Radish", "무", C.vegetables, "🥕"),
    ("Sweet Potato", "고구마", C.vegetables, "🍠"),
    ("Pumpkin", "호박", C.vegetables, "🎃"),
    ("Asparagus", "아스파라거스", C.vegetables, "🌿"),
    ("Celery", "샐러리", C.vegetables, "🌿"),
    ("Leek", "부추", C.vegetables, "🌿"),
    ("Bean Sprouts", "콩나물", C.vegetables, "🌱"),
    ("Kimchi", "김치", C.vegetables, "🥬"),
    ("Coriander", "고수", C.vegetables, "🌿"),
    # Fruits
    ("Apple", "사과", C.fruits, "🍎"),
    ("Banana", "바나나", C.fruits, "🍌"),
    ("Lemon", "레몬", C.fruits, "🍋"),
    ("Lime", "라임", C.fruits, "🍋"),
    ("Orange", "오렌지", C.fruits, "🍊"),
    ("Avocado", "아보카도", C.fruits, "🥑"),
    ("Strawberry", "딸기", C.fruits, "🍓"),
    ("Blueberry", "블루베리", C.fruits, "🫐"),
    # Meat
    ("Chicken Breast", "닭가슴살", C.meat, "🍗"),
    ("Chicken Thigh", "닭다리살", C.meat, "🍗"),
    ("Pork Belly", "삼겹살", C.meat, "🥓"),
    ("Pork Loin", "돼지 등심", C.meat, "🥩"),
    ("Beef Sirloin", "소고기 등심", C.meat, "🥩"),
    ("Ground Beef", "다진 소고기", C.meat, "🥩"),
    ("Ground Pork", "다진 돼지고기", C.meat, "🥩"),
    ("Sausage", "소시지", C.meat, "🌭"),
    ("Bacon", "베이컨", C.meat, "🥓"),
    ("Ham", "햄", C.meat, "🍖"),
    ("Tofu", "두부", C.meat, "🧈"),
    ("Egg", "계란", C.meat, "🥚"),
    # Seafood
    ("Shrimp", "새우", C.seafood, "🦐"),
    ("Salmon", "연어", C.seafood, "🐟"),
    ("Tuna", "참치", C.seafood, "🐟"),
    ("Squid", "오징어", C.seafood, "🦑"),
    ("Clams", "조개", C.seafood, "🐚"),
    # Grains & Carbs
    ("Rice", "밥", C.grains_carbs, "🍚"),
    ("Pasta", "파스타", C.grains_carbs, "🍝"),
    ("Bread", "빵", C.grains_carbs, "🍞"),
    ("Flour", "밀가루", C.grains_carbs, "🌾"),
    ("Noodles", "국수", C.grains_carbs, "🍜"),
    ("Ramen Noodles", "라면", C.grains_carbs, "🍜"),
    ("Rice Cakes (Tteok)", "떡", C.grains_carbs, "🍡"),
    ("Oats", "오트밀", C.grains_carbs, "🌾"),
    ("Quinoa", "퀴노아", C.grains_carbs, "🌾"),
    ("Corn", "옥수수", C.grains_carbs, "🌽"),
    # Dairy & Alternatives
    ("Milk", "우유", C.dairy, "🥛"),
    ("Cheese", "치즈", C.dairy, "🧀"),
    ("Cheddar Cheese", "체다 치즈", C.dairy, "🧀"),
    ("Mozzarella Cheese", "모짜렐라 치즈", C.dairy, "🧀"),
    ("Parmesan Cheese", "파마산 치즈", C.dairy, "🧀"),
    ("Yogurt", "요거트", C.dairy, "🥛"),
    ("Butter", "버터", C.dairy, "🧈"),
    ("Heavy Cream", "생크림", C.dairy, "🥛"),
    ("Sour Cream", "사워크림", C.dairy, "🥛"),
    ("Cream Cheese", "크림치즈", C.dairy, "🧀"),
    ("Soy Milk", "두유", C.dairy, "🥛"),
    ("Almond Milk", "아몬드 우유", C.dairy, "🥛"),
    # Spices & Sauces
    ("Salt", "소금", C.seasoning, "🧂"),
    ("Black Pepper", "후추", C.seasoning, "🧂"),
    ("Sugar", "설탕", C.seasoning, "🍬"),
    ("Brown Sugar", "흑설탕", C.seasoning, "🍬"),
    ("Honey", "꿀", C.seasoning, "🍯"),
    ("Olive Oil", "올리브 오일", C.seasoning, "🫒"),
    ("Vegetable Oil", "식용유", C.seasoning, "🛢️"),
    ("Sesame Oil", "참기름", C.seasoning, "🛢️"),
    ("Soy Sauce", "간장", C.seasoning, "🥢"),
    ("Vinegar", "식초", C.seasoning, "🍶"),
    ("Gochujang (Korean Chili Paste)", "고추장", C.seasoning, "🌶️"),
    ("Doenjang (Soybean Paste)", "된장", C.seasoning, "🥣"),
    ("Gochugaru (Chili Powder)", "고춧가루", C.seasoning, "🌶️"),
    ("Ketchup", "케첩", C.seasoning, "🍅"),
    ("Mayonnaise", "마요네즈", C.seasoning, "🥚"),
    ("Mustard", "머스타드", C.seasoning, "🌭"),
    ("Chili Flakes", "칠리 플레이크", C.seasoning, "🌶️"),
    ("Paprika", "파프리카 가루", C.seasoning, "🌶️"),
    ("Cumin", "큐민", C.seasoning, "🌿"),
    ("Turmeric", "강황", C.seasoning, "🌿"),
    ("Ginger", "생강", C.seasoning, "🫚"),
    ("Rosemary", "로즈마리", C.seasoning, "🌿"),
    ("Thyme", "타임", C.seasoning, "🌿"),
    ("Basil", "바질", C.seasoning, "🌿"),
    ("Oregano", "오레가노", C.seasoning, "🌿"),
    ("Cinnamon", "계피", C.seasoning, "🌿"),
    ("Nutmeg", "넛맥", C.seasoning, "🌰"),
    ("Fish Sauce", "액젓", C.seasoning, "🐟"),
    ("Oyster Sauce", "굴소스", C.seasoning, "🦪"),
    ("Mirin", "미림", C.seasoning, "🍶"),
    # Nuts & Seeds
    ("Almonds", "아몬드", C.nuts_seeds, "🌰"),
    ("Walnuts", "호두", C.nuts_seeds, "🌰"),
    ("Peanuts", "땅콩", C.nuts_seeds, "🥜"),
    ("Sesame Seeds", "참깨", C.nuts_seeds, "🌰"),
    ("Chia Seeds", "치아씨드", C.nuts_seeds, "🌰"),
    # Others
    ("Seaweed (Gim)", "김", C.others, "🍙"),
)


COMMON_INGREDIENTS: tuple[str, ...] = (
    "Onion",
    "Garlic",
    "Green Onion",
    "Potato",
    "Carrot",
    "Egg",
    "Tofu",
    "Rice",
    "Flour",
    "Milk",
    "Cheese",
    "Butter",
    "Salt",
    "Black Pepper",
    "Sugar",
    "Olive Oil",
    "Soy Sauce",
)
