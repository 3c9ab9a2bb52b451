"""
Management command to populate the database with the sample hospital.
"""
from django.core.management.base import BaseCommand

from hospital.services.seed import seed_sample_data
from hospital.storage import DatabaseStorage


class Command(BaseCommand):
    help = 'Populate the database with sample departments, doctors, patients, pharmacy and wards'

    def handle(self, *args, **options):
        self.stdout.write('Creating sample data...')
        if seed_sample_data(DatabaseStorage()):
            self.stdout.write(self.style.SUCCESS('Sample data created.'))
        else:
            self.stdout.write(self.style.WARNING('Departments already exist; nothing to do.'))
