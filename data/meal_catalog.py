"""Built-in meal catalog used when no hosted menu model is configured.

Each entry follows the `MealPayload` schema: macros per serving, dietary
tags, allergens, and structured ingredients with a shopping category and an
estimated cost in the user's currency.
"""


def _ing(name, quantity, unit, category, cost=None):
    return {"name": name, "quantity": quantity, "unit": unit, "category": category, "estimated_cost": cost}


MEAL_CATALOG = [
    # Breakfasts
    {
        "name": "Oatmeal with Berries", "meal_type": "breakfast",
        "calories": 350, "protein": 12, "carbs": 58, "fat": 8, "fiber": 9,
        "prep_time_minutes": 10, "difficulty": "easy",
        "instructions": "Simmer oats in almond milk, top with berries and chia seeds.",
        "dietary_tags": ["vegetarian", "vegan", "budget_friendly"], "allergens": ["tree nuts"],
        "ingredients": [
            _ing("rolled oats", 60, "g", "grains", 0.4),
            _ing("blueberries", 80, "g", "produce", 1.2),
            _ing("almond milk", 200, "ml", "dairy_alternatives", 0.5),
            _ing("chia seeds", 10, "g", "pantry", 0.3),
        ],
    },
    {
        "name": "Greek Yogurt Parfait", "meal_type": "breakfast",
        "calories": 320, "protein": 22, "carbs": 38, "fat": 8, "fiber": 4,
        "prep_time_minutes": 5, "difficulty": "easy",
        "instructions": "Layer yogurt, granola and strawberries; drizzle with honey.",
        "dietary_tags": ["vegetarian", "high-protein"], "allergens": ["dairy", "gluten"],
        "ingredients": [
            _ing("greek yogurt", 200, "g", "dairy", 1.5),
            _ing("granola", 30, "g", "grains", 0.5),
            _ing("strawberries", 80, "g", "produce", 1.0),
            _ing("honey", 10, "g", "pantry", 0.2),
        ],
    },
    {
        "name": "Veggie Omelette", "meal_type": "breakfast",
        "calories": 340, "protein": 24, "carbs": 8, "fat": 23, "fiber": 3,
        "prep_time_minutes": 15, "difficulty": "easy",
        "instructions": "Whisk eggs, cook with peppers, spinach and feta until set.",
        "dietary_tags": ["vegetarian", "keto", "gluten_free", "high-protein", "budget_friendly"],
        "allergens": ["eggs", "dairy"],
        "ingredients": [
            _ing("eggs", 3, "piece", "dairy", 0.9),
            _ing("bell pepper", 0.5, "piece", "produce", 0.5),
            _ing("spinach", 40, "g", "produce", 0.4),
            _ing("feta cheese", 30, "g", "dairy", 0.6),
            _ing("olive oil", 5, "ml", "pantry", 0.1),
        ],
    },
    {
        "name": "Avocado Toast with Egg", "meal_type": "breakfast",
        "calories": 410, "protein": 17, "carbs": 34, "fat": 24, "fiber": 9,
        "prep_time_minutes": 10, "difficulty": "easy",
        "instructions": "Toast bread, spread mashed avocado, top with a poached egg.",
        "dietary_tags": ["vegetarian"], "allergens": ["gluten", "eggs"],
        "ingredients": [
            _ing("whole grain bread", 2, "slice", "bakery", 0.5),
            _ing("avocado", 0.5, "piece", "produce", 0.9),
            _ing("eggs", 1, "piece", "dairy", 0.3),
            _ing("lemon", 0.25, "piece", "produce", 0.1),
        ],
    },
    {
        "name": "Tofu Scramble", "meal_type": "breakfast",
        "calories": 300, "protein": 21, "carbs": 12, "fat": 18, "fiber": 4,
        "prep_time_minutes": 15, "difficulty": "easy",
        "instructions": "Crumble tofu into a pan with turmeric, onion and tomatoes.",
        "dietary_tags": ["vegetarian", "vegan", "gluten_free", "high-protein", "budget_friendly"],
        "allergens": ["soy"],
        "ingredients": [
            _ing("firm tofu", 150, "g", "protein", 1.2),
            _ing("onion", 0.5, "piece", "produce", 0.2),
            _ing("cherry tomatoes", 80, "g", "produce", 0.6),
            _ing("turmeric", 1, "tsp", "spices", 0.05),
            _ing("olive oil", 5, "ml", "pantry", 0.1),
        ],
    },
    {
        "name": "Protein Pancakes", "meal_type": "breakfast",
        "calories": 420, "protein": 30, "carbs": 48, "fat": 11, "fiber": 5,
        "prep_time_minutes": 20, "difficulty": "medium",
        "instructions": "Blend oats, banana, eggs and cottage cheese; cook small pancakes.",
        "dietary_tags": ["vegetarian", "high-protein"], "allergens": ["eggs", "dairy"],
        "ingredients": [
            _ing("rolled oats", 50, "g", "grains", 0.3),
            _ing("banana", 1, "piece", "produce", 0.3),
            _ing("eggs", 2, "piece", "dairy", 0.6),
            _ing("cottage cheese", 100, "g", "dairy", 0.9),
        ],
    },
    {
        "name": "Shakshuka", "meal_type": "breakfast",
        "calories": 360, "protein": 19, "carbs": 22, "fat": 21, "fiber": 6,
        "prep_time_minutes": 25, "difficulty": "medium",
        "instructions": "Simmer tomatoes, peppers and spices; poach eggs in the sauce.",
        "dietary_tags": ["vegetarian", "gluten_free", "budget_friendly"], "allergens": ["eggs"],
        "ingredients": [
            _ing("eggs", 2, "piece", "dairy", 0.6),
            _ing("crushed tomatoes", 200, "g", "canned", 0.8),
            _ing("bell pepper", 0.5, "piece", "produce", 0.5),
            _ing("onion", 0.5, "piece", "produce", 0.2),
            _ing("cumin", 1, "tsp", "spices", 0.05),
        ],
    },
    {
        "name": "Chia Coconut Pudding", "meal_type": "breakfast",
        "calories": 330, "protein": 9, "carbs": 24, "fat": 22, "fiber": 12,
        "prep_time_minutes": 5, "difficulty": "easy",
        "instructions": "Stir chia into coconut milk, chill overnight, top with mango.",
        "dietary_tags": ["vegetarian", "vegan", "gluten_free"], "allergens": [],
        "ingredients": [
            _ing("chia seeds", 35, "g", "pantry", 0.9),
            _ing("coconut milk", 150, "ml", "dairy_alternatives", 0.8),
            _ing("mango", 80, "g", "produce", 0.8),
        ],
    },
    {
        "name": "Spinach Feta Egg Muffins", "meal_type": "breakfast",
        "calories": 340, "protein": 24, "carbs": 6, "fat": 24, "fiber": 2,
        "prep_time_minutes": 25, "difficulty": "easy",
        "instructions": "Whisk eggs with spinach and feta, pour into a muffin tin and bake 20 minutes.",
        "dietary_tags": ["vegetarian", "keto", "gluten_free", "high-protein"], "allergens": ["eggs", "dairy"],
        "ingredients": [
            _ing("eggs", 4, "piece", "dairy", 1.2),
            _ing("baby spinach", 40, "g", "produce", 0.4),
            _ing("feta cheese", 40, "g", "dairy", 0.8),
            _ing("olive oil", 5, "ml", "pantry", 0.1),
        ],
    },
    {
        "name": "Smoked Salmon Avocado Plate", "meal_type": "breakfast",
        "calories": 420, "protein": 22, "carbs": 9, "fat": 33, "fiber": 7,
        "prep_time_minutes": 5, "difficulty": "easy",
        "instructions": "Fan sliced avocado and smoked salmon on a plate, add cream cheese and dill.",
        "dietary_tags": ["keto", "gluten_free", "high-protein"], "allergens": ["fish", "dairy"],
        "ingredients": [
            _ing("smoked salmon", 80, "g", "protein", 3.0),
            _ing("avocado", 1, "piece", "produce", 1.0),
            _ing("cream cheese", 30, "g", "dairy", 0.4),
            _ing("fresh dill", 2, "g", "produce", 0.2),
        ],
    },
    # Lunches
    {
        "name": "Grilled Chicken Salad", "meal_type": "lunch",
        "calories": 480, "protein": 42, "carbs": 18, "fat": 26, "fiber": 6,
        "prep_time_minutes": 20, "difficulty": "easy",
        "instructions": "Grill chicken breast, slice over greens with olive oil dressing.",
        "dietary_tags": ["gluten_free", "high-protein", "keto"], "allergens": [],
        "ingredients": [
            _ing("chicken breast", 150, "g", "protein", 2.4),
            _ing("mixed greens", 80, "g", "produce", 1.0),
            _ing("cucumber", 0.5, "piece", "produce", 0.3),
            _ing("cherry tomatoes", 80, "g", "produce", 0.6),
            _ing("olive oil", 15, "ml", "pantry", 0.3),
        ],
    },
    {
        "name": "Quinoa Buddha Bowl", "meal_type": "lunch",
        "calories": 540, "protein": 19, "carbs": 72, "fat": 20, "fiber": 13,
        "prep_time_minutes": 25, "difficulty": "easy",
        "instructions": "Combine quinoa, roasted chickpeas, sweet potato and tahini.",
        "dietary_tags": ["vegetarian", "vegan", "gluten_free"], "allergens": ["sesame"],
        "ingredients": [
            _ing("quinoa", 70, "g", "grains", 0.7),
            _ing("chickpeas", 120, "g", "canned", 0.5),
            _ing("sweet potato", 150, "g", "produce", 0.5),
            _ing("tahini", 15, "g", "pantry", 0.3),
            _ing("kale", 40, "g", "produce", 0.5),
        ],
    },
    {
        "name": "Turkey Whole Wheat Wrap", "meal_type": "lunch",
        "calories": 470, "protein": 34, "carbs": 44, "fat": 16, "fiber": 7,
        "prep_time_minutes": 10, "difficulty": "easy",
        "instructions": "Fill a tortilla with turkey, hummus, lettuce and tomato.",
        "dietary_tags": ["high-protein", "budget_friendly"], "allergens": ["gluten", "sesame"],
        "ingredients": [
            _ing("whole wheat tortilla", 1, "piece", "bakery", 0.4),
            _ing("turkey breast", 100, "g", "protein", 1.6),
            _ing("hummus", 40, "g", "pantry", 0.4),
            _ing("lettuce", 30, "g", "produce", 0.2),
            _ing("tomato", 1, "piece", "produce", 0.3),
        ],
    },
    {
        "name": "Lentil Soup", "meal_type": "lunch",
        "calories": 420, "protein": 24, "carbs": 62, "fat": 7, "fiber": 16,
        "prep_time_minutes": 40, "difficulty": "easy",
        "instructions": "Simmer lentils with carrot, celery, onion and cumin until soft.",
        "dietary_tags": ["vegetarian", "vegan", "gluten_free", "budget_friendly"], "allergens": [],
        "ingredients": [
            _ing("red lentils", 90, "g", "grains", 0.4),
            _ing("carrot", 1, "piece", "produce", 0.2),
            _ing("celery", 1, "stalk", "produce", 0.2),
            _ing("onion", 0.5, "piece", "produce", 0.2),
            _ing("cumin", 1, "tsp", "spices", 0.05),
        ],
    },
    {
        "name": "Tuna Nicoise Salad", "meal_type": "lunch",
        "calories": 500, "protein": 38, "carbs": 26, "fat": 27, "fiber": 6,
        "prep_time_minutes": 25, "difficulty": "medium",
        "instructions": "Arrange tuna, potatoes, green beans, egg and olives; dress lightly.",
        "dietary_tags": ["gluten_free", "high-protein"], "allergens": ["fish", "eggs"],
        "ingredients": [
            _ing("canned tuna", 120, "g", "canned", 1.8),
            _ing("baby potatoes", 120, "g", "produce", 0.4),
            _ing("green beans", 80, "g", "produce", 0.6),
            _ing("eggs", 1, "piece", "dairy", 0.3),
            _ing("olives", 20, "g", "pantry", 0.4),
        ],
    },
    {
        "name": "Falafel Pita", "meal_type": "lunch",
        "calories": 560, "protein": 20, "carbs": 70, "fat": 22, "fiber": 11,
        "prep_time_minutes": 30, "difficulty": "medium",
        "instructions": "Bake falafel, stuff into pita with salad and tahini.",
        "dietary_tags": ["vegetarian", "vegan", "budget_friendly"], "allergens": ["gluten", "sesame"],
        "ingredients": [
            _ing("pita bread", 1, "piece", "bakery", 0.4),
            _ing("chickpeas", 150, "g", "canned", 0.6),
            _ing("parsley", 10, "g", "produce", 0.2),
            _ing("tahini", 15, "g", "pantry", 0.3),
            _ing("cucumber", 0.5, "piece", "produce", 0.3),
        ],
    },
    {
        "name": "Caprese Quinoa Salad", "meal_type": "lunch",
        "calories": 490, "protein": 21, "carbs": 48, "fat": 24, "fiber": 6,
        "prep_time_minutes": 20, "difficulty": "easy",
        "instructions": "Toss quinoa with mozzarella, tomatoes, basil and balsamic.",
        "dietary_tags": ["vegetarian", "gluten_free"], "allergens": ["dairy"],
        "ingredients": [
            _ing("quinoa", 60, "g", "grains", 0.6),
            _ing("mozzarella", 60, "g", "dairy", 1.0),
            _ing("cherry tomatoes", 100, "g", "produce", 0.7),
            _ing("basil", 5, "g", "produce", 0.3),
            _ing("balsamic vinegar", 10, "ml", "pantry", 0.1),
        ],
    },
    {
        "name": "Beef and Broccoli Bowl", "meal_type": "lunch",
        "calories": 560, "protein": 40, "carbs": 52, "fat": 20, "fiber": 5,
        "prep_time_minutes": 25, "difficulty": "medium",
        "instructions": "Stir-fry lean beef and broccoli in soy-ginger sauce, serve on rice.",
        "dietary_tags": ["high-protein"], "allergens": ["soy"],
        "ingredients": [
            _ing("lean beef", 130, "g", "protein", 2.8),
            _ing("broccoli", 150, "g", "produce", 0.6),
            _ing("brown rice", 60, "g", "grains", 0.2),
            _ing("soy sauce", 15, "ml", "pantry", 0.1),
            _ing("ginger", 5, "g", "produce", 0.1),
        ],
    },
    {
        "name": "Cobb Salad", "meal_type": "lunch",
        "calories": 560, "protein": 38, "carbs": 10, "fat": 41, "fiber": 6,
        "prep_time_minutes": 20, "difficulty": "easy",
        "instructions": "Top romaine with grilled chicken, boiled egg, avocado, bacon and blue cheese.",
        "dietary_tags": ["keto", "gluten_free", "high-protein"], "allergens": ["eggs", "dairy"],
        "ingredients": [
            _ing("romaine lettuce", 1, "head", "produce", 1.0),
            _ing("chicken breast", 120, "g", "protein", 2.0),
            _ing("eggs", 1, "piece", "dairy", 0.3),
            _ing("avocado", 0.5, "piece", "produce", 0.5),
            _ing("bacon", 30, "g", "protein", 0.8),
            _ing("blue cheese", 20, "g", "dairy", 0.5),
        ],
    },
    {
        "name": "Halloumi Lettuce Wraps", "meal_type": "lunch",
        "calories": 520, "protein": 27, "carbs": 11, "fat": 40, "fiber": 4,
        "prep_time_minutes": 15, "difficulty": "easy",
        "instructions": "Grill halloumi slices and wrap in lettuce leaves with cucumber, olives and tahini.",
        "dietary_tags": ["vegetarian", "keto", "gluten_free"], "allergens": ["dairy", "sesame"],
        "ingredients": [
            _ing("halloumi", 120, "g", "dairy", 2.2),
            _ing("butter lettuce", 1, "head", "produce", 1.0),
            _ing("cucumber", 0.5, "piece", "produce", 0.3),
            _ing("olives", 30, "g", "pantry", 0.5),
            _ing("tahini", 15, "g", "pantry", 0.3),
        ],
    },
    # Dinners
    {
        "name": "Baked Salmon with Vegetables", "meal_type": "dinner",
        "calories": 560, "protein": 40, "carbs": 22, "fat": 32, "fiber": 6,
        "prep_time_minutes": 30, "difficulty": "medium",
        "instructions": "Roast salmon fillet with zucchini and asparagus, finish with lemon.",
        "dietary_tags": ["gluten_free", "keto", "high-protein"], "allergens": ["fish"],
        "ingredients": [
            _ing("salmon fillet", 160, "g", "protein", 4.5),
            _ing("zucchini", 1, "piece", "produce", 0.6),
            _ing("asparagus", 100, "g", "produce", 1.5),
            _ing("lemon", 0.5, "piece", "produce", 0.2),
            _ing("olive oil", 10, "ml", "pantry", 0.2),
        ],
    },
    {
        "name": "Chickpea Spinach Curry", "meal_type": "dinner",
        "calories": 520, "protein": 19, "carbs": 68, "fat": 18, "fiber": 14,
        "prep_time_minutes": 35, "difficulty": "medium",
        "instructions": "Simmer chickpeas with tomatoes, coconut milk, spinach and curry paste; serve with rice.",
        "dietary_tags": ["vegetarian", "vegan", "gluten_free", "budget_friendly"], "allergens": [],
        "ingredients": [
            _ing("chickpeas", 150, "g", "canned", 0.6),
            _ing("spinach", 80, "g", "produce", 0.8),
            _ing("coconut milk", 100, "ml", "dairy_alternatives", 0.5),
            _ing("crushed tomatoes", 150, "g", "canned", 0.6),
            _ing("basmati rice", 60, "g", "grains", 0.3),
        ],
    },
    {
        "name": "Chicken Stir-Fry", "meal_type": "dinner",
        "calories": 530, "protein": 42, "carbs": 50, "fat": 16, "fiber": 6,
        "prep_time_minutes": 25, "difficulty": "easy",
        "instructions": "Stir-fry chicken strips with mixed vegetables and serve over rice.",
        "dietary_tags": ["high-protein", "budget_friendly"], "allergens": ["soy"],
        "ingredients": [
            _ing("chicken breast", 150, "g", "protein", 2.4),
            _ing("bell pepper", 1, "piece", "produce", 0.9),
            _ing("broccoli", 100, "g", "produce", 0.4),
            _ing("brown rice", 60, "g", "grains", 0.2),
            _ing("soy sauce", 15, "ml", "pantry", 0.1),
        ],
    },
    {
        "name": "Stuffed Bell Peppers", "meal_type": "dinner",
        "calories": 500, "protein": 30, "carbs": 44, "fat": 22, "fiber": 8,
        "prep_time_minutes": 45, "difficulty": "medium",
        "instructions": "Fill peppers with turkey, rice and tomato; bake until tender.",
        "dietary_tags": ["gluten_free", "high-protein"], "allergens": ["dairy"],
        "ingredients": [
            _ing("bell pepper", 2, "piece", "produce", 1.8),
            _ing("ground turkey", 120, "g", "protein", 1.7),
            _ing("brown rice", 50, "g", "grains", 0.2),
            _ing("crushed tomatoes", 100, "g", "canned", 0.4),
            _ing("cheddar cheese", 20, "g", "dairy", 0.4),
        ],
    },
    {
        "name": "Whole Wheat Pasta Primavera", "meal_type": "dinner",
        "calories": 580, "protein": 21, "carbs": 86, "fat": 17, "fiber": 12,
        "prep_time_minutes": 25, "difficulty": "easy",
        "instructions": "Toss pasta with sauteed seasonal vegetables, garlic and parmesan.",
        "dietary_tags": ["vegetarian", "budget_friendly"], "allergens": ["gluten", "dairy"],
        "ingredients": [
            _ing("whole wheat pasta", 90, "g", "grains", 0.4),
            _ing("zucchini", 0.5, "piece", "produce", 0.3),
            _ing("cherry tomatoes", 100, "g", "produce", 0.7),
            _ing("garlic", 2, "clove", "produce", 0.1),
            _ing("parmesan", 15, "g", "dairy", 0.5),
        ],
    },
    {
        "name": "Tofu Vegetable Stir-Fry", "meal_type": "dinner",
        "calories": 470, "protein": 26, "carbs": 40, "fat": 22, "fiber": 8,
        "prep_time_minutes": 25, "difficulty": "easy",
        "instructions": "Crisp tofu cubes, add snap peas and carrots, glaze with soy-ginger.",
        "dietary_tags": ["vegetarian", "vegan", "high-protein", "budget_friendly"], "allergens": ["soy"],
        "ingredients": [
            _ing("firm tofu", 180, "g", "protein", 1.4),
            _ing("snap peas", 100, "g", "produce", 0.9),
            _ing("carrot", 1, "piece", "produce", 0.2),
            _ing("soy sauce", 15, "ml", "pantry", 0.1),
            _ing("basmati rice", 50, "g", "grains", 0.2),
        ],
    },
    {
        "name": "Herb Roasted Chicken Thighs", "meal_type": "dinner",
        "calories": 590, "protein": 44, "carbs": 30, "fat": 32, "fiber": 5,
        "prep_time_minutes": 50, "difficulty": "medium",
        "instructions": "Roast chicken thighs with rosemary, potatoes and carrots.",
        "dietary_tags": ["gluten_free", "high-protein"], "allergens": [],
        "ingredients": [
            _ing("chicken thighs", 200, "g", "protein", 2.2),
            _ing("baby potatoes", 150, "g", "produce", 0.5),
            _ing("carrot", 1, "piece", "produce", 0.2),
            _ing("rosemary", 2, "sprig", "produce", 0.2),
            _ing("olive oil", 10, "ml", "pantry", 0.2),
        ],
    },
    {
        "name": "Zucchini Noodles with Shrimp", "meal_type": "dinner",
        "calories": 420, "protein": 34, "carbs": 14, "fat": 25, "fiber": 4,
        "prep_time_minutes": 20, "difficulty": "easy",
        "instructions": "Saute shrimp with garlic, toss with spiralized zucchini and pesto.",
        "dietary_tags": ["gluten_free", "keto", "high-protein"], "allergens": ["shellfish", "tree nuts"],
        "ingredients": [
            _ing("shrimp", 150, "g", "protein", 3.5),
            _ing("zucchini", 2, "piece", "produce", 1.2),
            _ing("basil pesto", 25, "g", "pantry", 0.8),
            _ing("garlic", 2, "clove", "produce", 0.1),
        ],
    },
    {
        "name": "Pan-Seared Steak with Asparagus", "meal_type": "dinner",
        "calories": 610, "protein": 46, "carbs": 8, "fat": 43, "fiber": 4,
        "prep_time_minutes": 25, "difficulty": "medium",
        "instructions": "Sear the steak in butter, rest it, and roast asparagus with garlic alongside.",
        "dietary_tags": ["keto", "gluten_free", "high-protein"], "allergens": ["dairy"],
        "ingredients": [
            _ing("sirloin steak", 180, "g", "protein", 5.0),
            _ing("asparagus", 150, "g", "produce", 1.5),
            _ing("butter", 15, "g", "dairy", 0.3),
            _ing("garlic", 2, "clove", "produce", 0.1),
        ],
    },
    {
        "name": "Cauliflower Crust Margherita", "meal_type": "dinner",
        "calories": 540, "protein": 30, "carbs": 16, "fat": 38, "fiber": 6,
        "prep_time_minutes": 40, "difficulty": "medium",
        "instructions": "Bake a crust of riced cauliflower, egg and parmesan, then top with tomato, mozzarella and basil.",
        "dietary_tags": ["vegetarian", "keto", "gluten_free"], "allergens": ["eggs", "dairy"],
        "ingredients": [
            _ing("cauliflower", 0.5, "head", "produce", 1.2),
            _ing("eggs", 1, "piece", "dairy", 0.3),
            _ing("parmesan", 30, "g", "dairy", 0.7),
            _ing("mozzarella", 80, "g", "dairy", 1.0),
            _ing("tomato", 1, "piece", "produce", 0.3),
            _ing("fresh basil", 5, "g", "produce", 0.2),
        ],
    },
    # Snacks
    {
        "name": "Apple with Peanut Butter", "meal_type": "snack",
        "calories": 200, "protein": 5, "carbs": 24, "fat": 10, "fiber": 5,
        "prep_time_minutes": 2, "difficulty": "easy",
        "instructions": "Slice the apple and serve with peanut butter.",
        "dietary_tags": ["vegetarian", "vegan", "gluten_free", "budget_friendly"], "allergens": ["peanuts"],
        "ingredients": [
            _ing("apple", 1, "piece", "produce", 0.5),
            _ing("peanut butter", 16, "g", "pantry", 0.2),
        ],
    },
    {
        "name": "Hummus with Carrot Sticks", "meal_type": "snack",
        "calories": 170, "protein": 6, "carbs": 18, "fat": 8, "fiber": 6,
        "prep_time_minutes": 5, "difficulty": "easy",
        "instructions": "Cut carrots into sticks and dip in hummus.",
        "dietary_tags": ["vegetarian", "vegan", "gluten_free", "budget_friendly"], "allergens": ["sesame"],
        "ingredients": [
            _ing("hummus", 60, "g", "pantry", 0.6),
            _ing("carrot", 2, "piece", "produce", 0.4),
        ],
    },
    {
        "name": "Cottage Cheese with Pineapple", "meal_type": "snack",
        "calories": 180, "protein": 16, "carbs": 18, "fat": 4, "fiber": 1,
        "prep_time_minutes": 2, "difficulty": "easy",
        "instructions": "Top cottage cheese with pineapple chunks.",
        "dietary_tags": ["vegetarian", "gluten_free", "high-protein"], "allergens": ["dairy"],
        "ingredients": [
            _ing("cottage cheese", 150, "g", "dairy", 1.2),
            _ing("pineapple", 60, "g", "produce", 0.5),
        ],
    },
    {
        "name": "Mixed Nuts", "meal_type": "snack",
        "calories": 190, "protein": 6, "carbs": 7, "fat": 16, "fiber": 3,
        "prep_time_minutes": 1, "difficulty": "easy",
        "instructions": "Portion a small handful of unsalted nuts.",
        "dietary_tags": ["vegetarian", "vegan", "gluten_free", "keto"], "allergens": ["tree nuts"],
        "ingredients": [
            _ing("mixed nuts", 30, "g", "pantry", 0.8),
        ],
    },
    {
        "name": "Roasted Edamame", "meal_type": "snack",
        "calories": 160, "protein": 14, "carbs": 10, "fat": 7, "fiber": 6,
        "prep_time_minutes": 20, "difficulty": "easy",
        "instructions": "Roast shelled edamame with sea salt until crisp.",
        "dietary_tags": ["vegetarian", "vegan", "gluten_free", "high-protein"], "allergens": ["soy"],
        "ingredients": [
            _ing("edamame", 100, "g", "frozen", 0.9),
            _ing("sea salt", 1, "pinch", "spices", 0.01),
        ],
    },
    {
        "name": "Hard-Boiled Eggs", "meal_type": "snack",
        "calories": 150, "protein": 12, "carbs": 1, "fat": 10, "fiber": 0,
        "prep_time_minutes": 12, "difficulty": "easy",
        "instructions": "Boil eggs for 10 minutes, cool and peel.",
        "dietary_tags": ["vegetarian", "keto", "gluten_free", "budget_friendly"], "allergens": ["eggs"],
        "ingredients": [
            _ing("eggs", 2, "piece", "dairy", 0.6),
        ],
    },
    # Intermediate meals (larger than a snack, lighter than a main)
    {
        "name": "Smoothie Bowl", "meal_type": "intermediate",
        "calories": 300, "protein": 12, "carbs": 48, "fat": 7, "fiber": 8,
        "prep_time_minutes": 8, "difficulty": "easy",
        "instructions": "Blend frozen berries, banana and yogurt; top with seeds.",
        "dietary_tags": ["vegetarian", "gluten_free"], "allergens": ["dairy"],
        "ingredients": [
            _ing("frozen berries", 120, "g", "frozen", 1.0),
            _ing("banana", 1, "piece", "produce", 0.3),
            _ing("greek yogurt", 100, "g", "dairy", 0.8),
            _ing("pumpkin seeds", 10, "g", "pantry", 0.3),
        ],
    },
    {
        "name": "Tuna Rice Cakes", "meal_type": "intermediate",
        "calories": 280, "protein": 24, "carbs": 28, "fat": 8, "fiber": 2,
        "prep_time_minutes": 5, "difficulty": "easy",
        "instructions": "Spread tuna mixed with yogurt on rice cakes, add cucumber slices.",
        "dietary_tags": ["gluten_free", "high-protein", "budget_friendly"], "allergens": ["fish", "dairy"],
        "ingredients": [
            _ing("rice cakes", 3, "piece", "grains", 0.4),
            _ing("canned tuna", 80, "g", "canned", 1.2),
            _ing("greek yogurt", 30, "g", "dairy", 0.2),
            _ing("cucumber", 0.5, "piece", "produce", 0.3),
        ],
    },
    {
        "name": "Vegetable Miso Soup", "meal_type": "intermediate",
        "calories": 220, "protein": 13, "carbs": 22, "fat": 9, "fiber": 5,
        "prep_time_minutes": 15, "difficulty": "easy",
        "instructions": "Dissolve miso in hot broth, add tofu, mushrooms and greens.",
        "dietary_tags": ["vegetarian", "vegan", "budget_friendly"], "allergens": ["soy"],
        "ingredients": [
            _ing("miso paste", 20, "g", "pantry", 0.4),
            _ing("firm tofu", 80, "g", "protein", 0.6),
            _ing("mushrooms", 60, "g", "produce", 0.6),
            _ing("bok choy", 60, "g", "produce", 0.5),
        ],
    },
    {
        "name": "Mediterranean Mezze Plate", "meal_type": "intermediate",
        "calories": 320, "protein": 11, "carbs": 30, "fat": 18, "fiber": 7,
        "prep_time_minutes": 10, "difficulty": "easy",
        "instructions": "Plate hummus, olives, cucumber, tomatoes and a small pita.",
        "dietary_tags": ["vegetarian", "vegan"], "allergens": ["sesame", "gluten"],
        "ingredients": [
            _ing("hummus", 50, "g", "pantry", 0.5),
            _ing("olives", 30, "g", "pantry", 0.5),
            _ing("cucumber", 0.5, "piece", "produce", 0.3),
            _ing("tomato", 1, "piece", "produce", 0.3),
            _ing("pita bread", 0.5, "piece", "bakery", 0.2),
        ],
    },
    {
        "name": "Caprese Skewers", "meal_type": "intermediate",
        "calories": 260, "protein": 14, "carbs": 5, "fat": 20, "fiber": 1,
        "prep_time_minutes": 10, "difficulty": "easy",
        "instructions": "Thread mozzarella, cherry tomatoes and basil onto skewers; drizzle with olive oil.",
        "dietary_tags": ["vegetarian", "keto", "gluten_free"], "allergens": ["dairy"],
        "ingredients": [
            _ing("mozzarella balls", 100, "g", "dairy", 1.2),
            _ing("cherry tomatoes", 80, "g", "produce", 0.6),
            _ing("fresh basil", 5, "g", "produce", 0.2),
            _ing("olive oil", 10, "ml", "pantry", 0.1),
        ],
    },
    {
        "name": "Turkey Cheese Roll-Ups", "meal_type": "intermediate",
        "calories": 290, "protein": 26, "carbs": 4, "fat": 19, "fiber": 1,
        "prep_time_minutes": 5, "difficulty": "easy",
        "instructions": "Roll turkey slices around cheese sticks and cucumber strips; serve with mustard.",
        "dietary_tags": ["keto", "gluten_free", "high-protein", "budget_friendly"], "allergens": ["dairy"],
        "ingredients": [
            _ing("sliced turkey", 100, "g", "protein", 1.5),
            _ing("cheddar cheese", 40, "g", "dairy", 0.5),
            _ing("cucumber", 0.5, "piece", "produce", 0.3),
            _ing("mustard", 10, "g", "pantry", 0.1),
        ],
    },
]
