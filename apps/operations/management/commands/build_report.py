from django.core.management.base import BaseCommand, CommandError

from apps.operations.application.reports import Feature
from apps.operations.application.tasks import build_aggregation_report
from apps.operations.domain.services import format_date_input, parse_date_input


class Command(BaseCommand):
    help = 'Build a multi-currency aggregation report for a date range'

    def add_arguments(self, parser):
        parser.add_argument(
            '--feature',
            dest='feature',
            choices=Feature.CHOICES,
            required=True,
            help='Which records to aggregate'
        )
        parser.add_argument(
            '--from',
            dest='date_from',
            type=str,
            required=True,
            help='Start date in YYYY-MM-DD format'
        )
        parser.add_argument(
            '--to',
            dest='date_to',
            type=str,
            required=True,
            help='End date in YYYY-MM-DD format'
        )
        parser.add_argument(
            '--unit',
            dest='unit',
            choices=['day', 'week', 'month'],
            default='month',
            help='Bucket size (default: month)'
        )
        parser.add_argument(
            '--currency',
            dest='currency',
            choices=['USD', 'JPY', 'VND'],
            default='USD',
            help='Display currency (default: USD)'
        )
        parser.add_argument(
            '--sync',
            action='store_true',
            help='Execute synchronously instead of using Celery task queue'
        )

    def handle(self, **options):
        feature = options['feature']
        date_from_str = options['date_from']
        date_to_str = options['date_to']

        date_from = parse_date_input(date_from_str)
        date_to = parse_date_input(date_to_str)
        if date_from is None or date_to is None:
            raise CommandError('Invalid date format. Use YYYY-MM-DD')

        if date_from > date_to:
            raise CommandError('date_from must be before or equal to date_to')

        args = (feature, format_date_input(date_from), format_date_input(date_to), options['unit'], options['currency'])

        if not options['sync']:
            task = build_aggregation_report.delay(*args)
            self.stdout.write(self.style.SUCCESS(f'Task dispatched with ID: {task.id}'))
            self.stdout.write('Use "celery -A core result <id>" to fetch the report')
            return

        result = build_aggregation_report(*args)
        if not result['success']:
            raise CommandError(f"Failed: {result.get('message', 'Unknown error')}")

        report = result['report']
        self.stdout.write(
            self.style.SUCCESS(
                f"{report['count']} rows, total {report['formatted_total']} ({report['rate_note']})"
            )
        )
        for bucket in report['buckets']:
            self.stdout.write(
                f"  {bucket['label']}: {bucket['total']} {report['display_currency']} "
                f"({bucket['confirmed_count']} confirmed / {bucket['unconfirmed_count']} pending)"
            )
