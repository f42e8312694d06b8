# slots/urls.py
from django.urls import path
from . import api, views

app_name = 'slots'

urlpatterns = [
    # --- Staff ---
    path('staff/', views.staff_index, name='staff_index'),
    path('staff/create/', views.create, name='create'),
    path('staff/remove/', views.remove, name='remove'),
    path('staff/rooms/create/', views.create_room, name='create_room'),
    path('staff/upload/', views.upload, name='upload'),
    path('staff/export/excel/', views.export_excel, name='export_excel'),
    path('staff/export/pdf/', views.export_pdf, name='export_pdf'),

    # --- Students ---
    path('student/', views.student_index, name='student_index'),
    path('student/book/', views.book, name='book'),
    path('student/cancel/', views.cancel, name='cancel'),
]

api_urlpatterns = [
    path('', api.index, name='api_index'),
    path('student/<str:student_id>/', api.student_index, name='api_student_index'),
    path('staff/<str:staff_id>/', api.staff_index, name='api_staff_index'),
    path('<str:room_id>/<str:start_date>/<str:start_time>/', api.slot_detail, name='api_slot_detail'),
]
