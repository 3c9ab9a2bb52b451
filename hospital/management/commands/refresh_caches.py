from django.core.cache import cache
from django.core.management.base import BaseCommand
from django.utils import timezone

from hospital.services import dashboard
from hospital.services.realtime import broadcast_refresh
from hospital.storage import get_storage


class Command(BaseCommand):
    help = "Rebuild the dashboard caches and broadcast a WebSocket refresh event."

    def handle(self, *args, **options):
        now = timezone.now()
        storage = get_storage()
        dashboard.invalidate_dashboard()
        builders = {
            'stats': lambda: dashboard.dashboard_stats(storage),
            'recent-activities': lambda: dashboard.recent_activities(storage),
            'upcoming-appointments': lambda: dashboard.upcoming_appointments_list(storage),
            'hospital-capacity': lambda: dashboard.hospital_capacity(storage),
        }
        ttl = options.get('ttl') or None
        keys_refreshed = []
        for name, build in builders.items():
            key = dashboard.CACHE_KEYS[name]
            if ttl:
                cache.set(key, build(), ttl)
            else:
                dashboard.cached(name, build)
            keys_refreshed.append(key)

        broadcast_refresh(now.isoformat(), keys_refreshed)

        self.stdout.write(self.style.SUCCESS(f"Refreshed {len(keys_refreshed)} keys at {now}"))

    def add_arguments(self, parser):
        parser.add_argument('--ttl', type=int, default=0, help='Override SIMRS_DASHBOARD_CACHE_TTL (seconds)')
