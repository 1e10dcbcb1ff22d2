from django.db.models import Count, Q

from clinic.models import StaffMember


def department_overview() -> list[dict]:
    """Head count per department, with active staff broken down by shift."""
    rows = (StaffMember.objects.values('department')
            .annotate(
                total=Count('id'),
                active=Count('id', filter=Q(is_active=True)),
                morning=Count('id', filter=Q(is_active=True, shift='morning')),
                evening=Count('id', filter=Q(is_active=True, shift='evening')),
                night=Count('id', filter=Q(is_active=True, shift='night')),
            )
            .order_by('department'))
    return [{
        'department': r['department'],
        'total': r['total'],
        'active': r['active'],
        'byShift': {'morning': r['morning'], 'evening': r['evening'], 'night': r['night']},
    } for r in rows]
