from django.contrib import admin

from playgrounds.models import Booking, Playground, PlaygroundReport


class BookingInline(admin.TabularInline):
    model = Booking
    extra = 0


class PlaygroundReportInline(admin.TabularInline):
    model = PlaygroundReport
    extra = 0


@admin.register(Playground)
class PlaygroundAdmin(admin.ModelAdmin):
    list_display = ["name", "category", "owner", "rating", "report_count", "is_active"]
    list_filter = ["category", "is_active"]
    search_fields = ["name", "address"]
    inlines = [BookingInline, PlaygroundReportInline]


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = ["playground", "requester", "date", "start_time", "end_time", "status", "rating"]
    list_filter = ["status", "playground"]


@admin.register(PlaygroundReport)
class PlaygroundReportAdmin(admin.ModelAdmin):
    list_display = ["playground", "reporter", "created_at"]
    search_fields = ["reason"]
