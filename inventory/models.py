from django.db import models
from authentication.models import Shop


class FoodCategory(models.Model):
    shop = models.ForeignKey(Shop, on_delete=models.CASCADE, related_name='categories')
    name = models.CharField(max_length=50)
    position = models.IntegerField(default=0)
    date_added = models.DateField(auto_now_add=True)
    active = models.BooleanField(default=True)

    def __str__(self):
        return str(self.name)

    class Meta:
        unique_together = ['shop', 'name']
        ordering = ['position', 'name']
        verbose_name_plural = "Food Categories"


class Menu(models.Model):
    shop = models.ForeignKey(Shop, on_delete=models.CASCADE, related_name='menu_items')
    category = models.ForeignKey(FoodCategory, on_delete=models.SET_NULL, null=True, blank=True, related_name="items")
    name = models.CharField(max_length=255)
    description = models.CharField(max_length=1000, null=True, blank=True)

    DIET_CHOICES = [
        ("Veg", "Veg"),
        ("Non-Veg", "Non-Veg"),
        ("Egg", "Egg")
    ]
    diet = models.CharField(max_length=20, choices=DIET_CHOICES, default="Veg")

    price = models.DecimalField(max_digits=10, decimal_places=2)
    is_available = models.BooleanField(default=True)
    create_date = models.DateField(auto_now_add=True)

    def __str__(self):
        return self.name

    class Meta:
        ordering = ['category__position', 'name']
        unique_together = ['shop', 'name']
