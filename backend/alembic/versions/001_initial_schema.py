"""Initial schema

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Create ENUM types
    op.execute("CREATE TYPE loan_type AS ENUM ('bridge_fix_and_flip', 'dscr_rental')")
    op.execute("CREATE TYPE quote_status AS ENUM ('draft', 'submitted', 'matched')")
    op.execute("CREATE TYPE exit_plan AS ENUM ('refinance', 'sell')")
    op.execute("CREATE TYPE match_status AS ENUM ('qualified', 'disqualified')")

    # Create quotes table
    op.create_table(
        'quotes',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('address', sa.Text(), nullable=True),
        sa.Column('is_living_in_property', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('loan_type', postgresql.ENUM(name='loan_type', create_type=False), nullable=True),
        sa.Column('is_draft', sa.Boolean(), nullable=False, server_default=sa.text('true')),
        sa.Column('status', postgresql.ENUM(name='quote_status', create_type=False), nullable=False, server_default='draft'),
    )
    op.create_index('ix_quotes_loan_type', 'quotes', ['loan_type'])
    op.create_index('ix_quotes_status', 'quotes', ['status'])

    # Create quote_applicant_info table
    op.create_table(
        'quote_applicant_info',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('quote_id', sa.Integer(), nullable=False, unique=True),
        sa.Column('full_name', sa.String(length=255), nullable=False),
        sa.Column('citizenship', sa.String(length=100), nullable=True),
        sa.Column('credit_score', sa.Integer(), nullable=True),
        sa.Column('phone_number', sa.String(length=30), nullable=True),
        sa.Column('company_name', sa.String(length=100), nullable=True),
        sa.Column('company_ein', sa.String(length=20), nullable=True),
        sa.Column('company_state', sa.String(length=50), nullable=True),
        sa.Column('liquid_funds_available', sa.String(length=50), nullable=True),
        sa.Column('properties_owned', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('total_equity_value', sa.String(length=50), nullable=True),
        sa.Column('total_debt_value', sa.String(length=50), nullable=True),
        sa.ForeignKeyConstraint(['quote_id'], ['quotes.id'], ondelete='CASCADE'),
    )

    # Create quote_loan_details table
    op.create_table(
        'quote_loan_details',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('quote_id', sa.Integer(), nullable=False, unique=True),
        sa.Column('purpose_of_loan', sa.String(length=50), nullable=True),
        sa.Column('requested_loan_amount', sa.String(length=50), nullable=True),
        sa.Column('purchase_price', sa.String(length=50), nullable=True),
        sa.Column('property_purchase_date', sa.Date(), nullable=True),
        sa.Column('has_rehab_funds_requested', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('rehab_amount_requested', sa.String(length=50), nullable=True),
        sa.Column('as_is_property_value', sa.String(length=50), nullable=True),
        sa.Column('after_repair_property_value', sa.String(length=50), nullable=True),
        sa.Column('exit_plan', postgresql.ENUM(name='exit_plan', create_type=False), nullable=True),
        sa.ForeignKeyConstraint(['quote_id'], ['quotes.id'], ondelete='CASCADE'),
    )

    # Create quote_rental_info table
    op.create_table(
        'quote_rental_info',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('quote_id', sa.Integer(), nullable=False, unique=True),
        sa.Column('loan_amount', sa.String(length=50), nullable=False),
        sa.Column('monthly_rental_income', sa.String(length=50), nullable=False),
        sa.Column('annual_property_insurance', sa.String(length=50), nullable=True),
        sa.Column('annual_property_taxes', sa.String(length=50), nullable=True),
        sa.Column('monthly_hoa_fee', sa.String(length=50), nullable=True),
        sa.ForeignKeyConstraint(['quote_id'], ['quotes.id'], ondelete='CASCADE'),
    )

    # Create lenders table
    op.create_table(
        'lenders',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('company_name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False, unique=True),
        sa.Column('contact_name', sa.String(length=255), nullable=True),
        sa.Column('phone_number', sa.String(length=30), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.text('true')),
    )
    op.create_index('ix_lenders_company_name', 'lenders', ['company_name'])

    # Create loan_products table
    op.create_table(
        'loan_products',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('lender_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('loan_type', postgresql.ENUM(name='loan_type', create_type=False), nullable=False),
        sa.Column('min_loan_amount', sa.Numeric(precision=15, scale=2), nullable=True),
        sa.Column('max_loan_amount', sa.Numeric(precision=15, scale=2), nullable=True),
        sa.Column('min_credit_score', sa.Integer(), nullable=True),
        sa.Column('citizen_requirements', postgresql.JSONB(astext_type=sa.Text()), nullable=False, server_default='[]'),
        sa.Column('states_funded', postgresql.JSONB(astext_type=sa.Text()), nullable=False, server_default='[]'),
        sa.Column('seasoning_period_months', sa.Integer(), nullable=True),
        sa.Column('accepts_rehab_loans', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('max_ltv_percentage', sa.Numeric(precision=5, scale=2), nullable=True),
        sa.Column('appraisal_required', sa.Boolean(), nullable=False, server_default=sa.text('true')),
        sa.Column('appraisal_requirements', sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(['lender_id'], ['lenders.id'], ondelete='CASCADE'),
        sa.CheckConstraint(
            'min_loan_amount IS NULL OR max_loan_amount IS NULL OR min_loan_amount <= max_loan_amount',
            name='ck_loan_products_amount_bounds',
        ),
    )
    op.create_index('ix_loan_products_lender_id', 'loan_products', ['lender_id'])
    op.create_index('ix_loan_products_loan_type', 'loan_products', ['loan_type'])

    # Create quote_lender_matches table
    op.create_table(
        'quote_lender_matches',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('quote_id', sa.Integer(), nullable=False),
        sa.Column('lender_id', sa.Integer(), nullable=False),
        sa.Column('match_status', postgresql.ENUM(name='match_status', create_type=False), nullable=False),
        sa.Column('disqualification_reason', sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(['quote_id'], ['quotes.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['lender_id'], ['lenders.id'], ondelete='CASCADE'),
        sa.UniqueConstraint('quote_id', 'lender_id', name='uq_quote_lender_match'),
    )
    op.create_index('ix_quote_lender_matches_quote_id', 'quote_lender_matches', ['quote_id'])
    op.create_index('ix_quote_lender_matches_lender_id', 'quote_lender_matches', ['lender_id'])
    op.create_index('ix_quote_lender_matches_match_status', 'quote_lender_matches', ['match_status'])


def downgrade() -> None:
    op.drop_index('ix_quote_lender_matches_match_status', table_name='quote_lender_matches')
    op.drop_index('ix_quote_lender_matches_lender_id', table_name='quote_lender_matches')
    op.drop_index('ix_quote_lender_matches_quote_id', table_name='quote_lender_matches')
    op.drop_table('quote_lender_matches')

    op.drop_index('ix_loan_products_loan_type', table_name='loan_products')
    op.drop_index('ix_loan_products_lender_id', table_name='loan_products')
    op.drop_table('loan_products')

    op.drop_index('ix_lenders_company_name', table_name='lenders')
    op.drop_table('lenders')

    op.drop_table('quote_rental_info')
    op.drop_table('quote_loan_details')
    op.drop_table('quote_applicant_info')

    op.drop_index('ix_quotes_status', table_name='quotes')
    op.drop_index('ix_quotes_loan_type', table_name='quotes')
    op.drop_table('quotes')

    # Drop ENUM types
    op.execute('DROP TYPE match_status')
    op.execute('DROP TYPE exit_plan')
    op.execute('DROP TYPE quote_status')
    op.execute('DROP TYPE loan_type')
