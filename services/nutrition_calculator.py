"""Nutrition target helpers.

Derives daily calorie and macro goals from questionnaire answers
(Mifflin-St Jeor BMR, activity multiplier, goal adjustment) and splits
them across meal slots.
"""

from typing import Dict, Optional
from core.logger import get_logger

logger = get_logger("services.nutrition_calculator")

ACTIVITY_MULTIPLIERS = {
    'sedentary': 1.2,
    'lightly_active': 1.375,
    'moderately_active': 1.55,
    'very_active': 1.725,
    'extremely_active': 1.9,
}

MACRO_RATIOS = {
    'keto': {'protein': 0.3, 'carbs': 0.1, 'fat': 0.6},
    'high-protein': {'protein': 0.4, 'carbs': 0.3, 'fat': 0.3},
    'vegan': {'protein': 0.2, 'carbs': 0.5, 'fat': 0.3},
    'balanced': {'protein': 0.3, 'carbs': 0.4, 'fat': 0.3},
}


class NutritionCalculator:
    """Class-based nutrition calculator used across the app."""

    def calculate_bmr(self, age: int, height_cm: float, weight_kg: float, gender: str) -> float:
        """Calculate BMR using Mifflin-St Jeor approximation."""
        if (gender or '').lower() == 'male':
            return 10 * weight_kg + 6.25 * height_cm - 5 * age + 5
        return 10 * weight_kg + 6.25 * height_cm - 5 * age - 161

    def calculate_tdee(self, bmr: float, activity_level: str) -> float:
        """Estimate TDEE from BMR and activity multiplier."""
        return bmr * ACTIVITY_MULTIPLIERS.get(activity_level, 1.2)

    def calculate_target_calories(self, tdee: float, health_goal: str) -> float:
        """Derive a daily calorie target from TDEE based on a health goal."""
        if health_goal == 'weight_loss':
            return max(1200, tdee - 500)
        if health_goal == 'muscle_gain':
            return tdee + 300
        return tdee

    def calculate_macros(self, target_calories: float, dietary_style: Optional[str]) -> Dict[str, float]:
        """Allocate macronutrient targets (grams) from a calorie target."""
        ratios = MACRO_RATIOS.get((dietary_style or 'balanced').lower(), MACRO_RATIOS['balanced'])
        return {
            'protein': round(target_calories * ratios['protein'] / 4),
            'carbs': round(target_calories * ratios['carbs'] / 4),
            'fat': round(target_calories * ratios['fat'] / 9),
        }

    def daily_targets(self, questionnaire) -> Dict[str, float]:
        """Return ``calories/protein/carbs/fat`` goals for a questionnaire row."""
        bmr = self.calculate_bmr(questionnaire.age, questionnaire.height_cm, questionnaire.weight_kg, questionnaire.gender)
        tdee = self.calculate_tdee(bmr, questionnaire.activity_level)
        calories = round(self.calculate_target_calories(tdee, questionnaire.main_goal))
        targets = {'calories': calories, **self.calculate_macros(calories, questionnaire.dietary_style)}
        logger.debug("Daily targets for goal %s: %s", questionnaire.main_goal, targets)
        return targets

    def targets_for_calories(self, calories: float, dietary_style: Optional[str]) -> Dict[str, float]:
        return {'calories': round(calories), **self.calculate_macros(calories, dietary_style)}

    def split_for_slot(self, targets: Dict[str, float], share: float) -> Dict[str, float]:
        """Scale daily targets down to one meal slot's share of the day."""
        return {k: v * share for k, v in targets.items()}


# export singleton
nutrition_calculator = NutritionCalculator()
__all__ = ["NutritionCalculator", "nutrition_calculator", "ACTIVITY_MULTIPLIERS", "MACRO_RATIOS"]
