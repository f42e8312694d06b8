import csv
import io
import os
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from slots.models import Room

class Command(BaseCommand):
    help = 'Imports rooms from a CSV file.'

    def add_arguments(self, parser):
        parser.add_argument(
            'csv_file',
            type=str,
            help='Full path to the rooms CSV file'
        )

    def handle(self, *args, **options):
        file_path = options['csv_file']

        if not os.path.exists(file_path):
            raise CommandError(f'CSV file not found at: "{file_path}"')

        self.stdout.write(self.style.NOTICE(f'Importing rooms from: {file_path}'))

        processed = 0
        created_count = 0
        existing_count = 0

        try:
            with transaction.atomic():
                with io.open(file_path, 'r', encoding='utf-8') as f:
                    reader = csv.DictReader(f)

                    if not reader.fieldnames or 'room_id' not in reader.fieldnames:
                        raise CommandError("The CSV must contain the column: room_id")

                    for row in reader:
                        room_id = (row.get('room_id') or '').strip()
                        processed += 1

                        if not room_id:
                            self.stdout.write(self.style.WARNING(
                                f'Row {processed}: skipped, empty room id. Data: {row}'
                            ))
                            continue

                        if len(room_id) > Room._meta.get_field('room_id').max_length:
                            self.stdout.write(self.style.ERROR(
                                f'Row {processed}: room id "{room_id}" is too long. Skipped.'
                            ))
                            continue

                        _, created = Room.objects.get_or_create(pk=room_id)

                        if created:
                            created_count += 1
                            self.stdout.write(self.style.SUCCESS(f'Room created: {room_id}'))
                        else:
                            existing_count += 1
                            self.stdout.write(self.style.WARNING(f'Room already exists: {room_id}'))

        except CommandError:
            raise
        except (OSError, csv.Error) as e:
            raise CommandError(f'Import failed: {e}') from e

        self.stdout.write(self.style.SUCCESS('\n--- Import finished ---'))
        self.stdout.write(self.style.SUCCESS(f'Rows processed: {processed}'))
        self.stdout.write(self.style.SUCCESS(f'Rooms created: {created_count}'))
        self.stdout.write(self.style.SUCCESS(f'Rooms already present: {existing_count}'))
