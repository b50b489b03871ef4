import apps.budgets.models
import django.core.validators
import django.db.models.deletion
from decimal import Decimal
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('projects', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Category',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('name', models.CharField(db_index=True, max_length=100)),
                ('color', models.CharField(default='#6366f1', max_length=7, validators=[apps.budgets.models.hex_color_validator])),
            ],
            options={
                'verbose_name': 'category',
                'verbose_name_plural': 'categories',
                'db_table': 'category',
                'ordering': ['name'],
                'abstract': False,
            },
        ),
        migrations.CreateModel(
            name='Budget',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('name', models.CharField(db_index=True, max_length=100)),
                ('total_amount', models.DecimalField(db_column='totalamount', decimal_places=2, max_digits=15, validators=[django.core.validators.MinValueValidator(Decimal('0.00'))])),
                ('category', models.ForeignKey(db_column='categoryid', on_delete=django.db.models.deletion.PROTECT, related_name='budgets', to='budgets.category')),
                ('project', models.ForeignKey(db_column='projectid', on_delete=django.db.models.deletion.PROTECT, related_name='budgets', to='projects.project')),
            ],
            options={
                'verbose_name': 'budget',
                'verbose_name_plural': 'budgets',
                'db_table': 'budget',
                'ordering': ['name'],
                'abstract': False,
                'indexes': [models.Index(fields=['project', 'category'], name='budget_project_category_idx')],
                'constraints': [models.CheckConstraint(condition=models.Q(('total_amount__gte', 0)), name='budget_total_amount_non_negative')],
            },
        ),
        migrations.CreateModel(
            name='Expense',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('amount', models.DecimalField(decimal_places=2, max_digits=15, validators=[django.core.validators.MinValueValidator(Decimal('0.01'))])),
                ('description', models.TextField(blank=True)),
                ('date', models.DateField(db_index=True)),
                ('budget', models.ForeignKey(db_column='budgetid', on_delete=django.db.models.deletion.PROTECT, related_name='expenses', to='budgets.budget')),
                ('category', models.ForeignKey(db_column='categoryid', on_delete=django.db.models.deletion.PROTECT, related_name='expenses', to='budgets.category')),
            ],
            options={
                'verbose_name': 'expense',
                'verbose_name_plural': 'expenses',
                'db_table': 'expense',
                'ordering': ['-date', '-pk'],
                'indexes': [
                    models.Index(fields=['budget', 'date'], name='expense_budget_date_idx'),
                    models.Index(fields=['category', 'date'], name='expense_category_date_idx'),
                ],
                'constraints': [models.CheckConstraint(condition=models.Q(('amount__gt', 0)), name='expense_amount_positive')],
            },
        ),
    ]
