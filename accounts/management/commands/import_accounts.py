# accounts/management/commands/import_accounts.py
import csv
import os
from django.core.exceptions import ValidationError
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction
from accounts.models import Account

REQUIRED_COLUMNS = ['account_id', 'first_name', 'last_name', 'email', 'password', 'role']

class Command(BaseCommand):
    help = 'Imports staff and student accounts from a CSV file.'

    def add_arguments(self, parser):
        parser.add_argument(
            'csv_file',
            type=str,
            help='Full path to the accounts CSV file'
        )

    def handle(self, *args, **options):
        file_path = options['csv_file']

        if not os.path.exists(file_path):
            raise CommandError(f'CSV file not found at: "{file_path}"')

        self.stdout.write(self.style.NOTICE(f'Importing accounts from: {file_path}'))

        imported = 0
        rejected = 0

        # One transaction: if saving a valid row fails, nothing is imported
        try:
            with transaction.atomic():
                with open(file_path, 'r', encoding='utf-8') as f:
                    reader = csv.DictReader(f)

                    missing = [c for c in REQUIRED_COLUMNS if c not in (reader.fieldnames or [])]
                    if missing:
                        raise CommandError(f"The CSV must contain the columns: {', '.join(REQUIRED_COLUMNS)}")

                    for line, row in enumerate(reader, start=2):
                        account = Account.objects.filter(account_id=row['account_id'].strip()).first()
                        created = account is None
                        if created:
                            account = Account(account_id=row['account_id'].strip())

                        account.first_name = row['first_name'].strip()
                        account.last_name = row['last_name'].strip()
                        account.email = row['email'].strip() or None
                        account.role = row['role'].strip().upper()
                        account.is_active = True
                        if row['password']:
                            account.set_password(row['password'])

                        try:
                            account.full_clean()
                        except ValidationError as e:
                            rejected += 1
                            self.stdout.write(self.style.ERROR(
                                f'Line {line}: account {account.account_id} rejected: {"; ".join(e.messages)}'
                            ))
                            continue

                        account.save()
                        imported += 1

                        if created:
                            self.stdout.write(self.style.SUCCESS(f'Account created: {account.account_id} ({account.role})'))
                        else:
                            self.stdout.write(self.style.WARNING(f'Account updated: {account.account_id} ({account.role})'))

        except CommandError:
            raise
        except (OSError, csv.Error, KeyError) as e:
            raise CommandError(f'Import failed: {e}') from e

        self.stdout.write(self.style.SUCCESS('\n--- Import finished ---'))
        self.stdout.write(self.style.SUCCESS(f'Accounts imported: {imported}'))
        if rejected:
            self.stdout.write(self.style.WARNING(f'Accounts rejected: {rejected}'))
