from django.contrib import admin

from rentals.models import Business, Event, EventFacility, Facility, FacilityApplication, Owner, Payment


class EventFacilityInline(admin.TabularInline):
    model = EventFacility
    extra = 1


class BusinessInline(admin.TabularInline):
    model = Business
    extra = 0


@admin.register(Owner)
class OwnerAdmin(admin.ModelAdmin):
    list_display = ["name", "email", "category", "status", "registered_at"]
    list_filter = ["category", "status"]
    search_fields = ["name", "email"]
    inlines = [BusinessInline]


@admin.register(Business)
class BusinessAdmin(admin.ModelAdmin):
    list_display = ["name", "owner", "category", "status"]
    list_filter = ["status"]
    search_fields = ["name", "owner__name"]


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = ["name", "venue", "start_date", "end_date", "application_window", "status", "record_state"]
    list_filter = ["application_window", "status", "record_state"]
    search_fields = ["name", "venue"]
    inlines = [EventFacilityInline]


@admin.register(Facility)
class FacilityAdmin(admin.ModelAdmin):
    list_display = ["name", "type", "size", "record_state"]
    list_filter = ["record_state"]
    search_fields = ["name"]


@admin.register(FacilityApplication)
class FacilityApplicationAdmin(admin.ModelAdmin):
    list_display = ["business", "event_facility", "quantity", "status", "created_at"]
    list_filter = ["status", "event_facility__event"]
    search_fields = ["business__name"]
    readonly_fields = ["status", "rejection_reason"]


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    list_display = ["application", "amount", "status", "created_at"]
    list_filter = ["status"]
